"""External service adapters."""

from .image_inspector import HttpImageInspector

__all__ = ["HttpImageInspector"]
