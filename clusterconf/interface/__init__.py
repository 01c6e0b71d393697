from .config_renderer import ConfigRenderer


__all__ = ["ConfigRenderer"]
