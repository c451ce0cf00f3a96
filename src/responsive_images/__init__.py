"""Responsive image srcset generation for Python-Markdown."""

from .extension import ResponsiveImageExtension, makeExtension
from .renderer import NO_MATCH, ResponsiveImageRenderer, escape_attribute, responsive_images

__all__ = [
    "NO_MATCH",
    "ResponsiveImageExtension",
    "ResponsiveImageRenderer",
    "escape_attribute",
    "makeExtension",
    "responsive_images",
]
