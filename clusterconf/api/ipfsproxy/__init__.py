from .config import ProxyConfig


__all__ = ["ProxyConfig"]
