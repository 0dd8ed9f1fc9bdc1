"""Capture ports."""

from .image_source import IImageSource

__all__ = ["IImageSource"]
