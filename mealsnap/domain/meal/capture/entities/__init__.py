"""Capture entities."""

from .captured_image import CapturedImage, ImageOrigin

__all__ = ["CapturedImage", "ImageOrigin"]
