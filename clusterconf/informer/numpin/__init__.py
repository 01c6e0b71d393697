from .config import InformerConfig


__all__ = ["InformerConfig"]
