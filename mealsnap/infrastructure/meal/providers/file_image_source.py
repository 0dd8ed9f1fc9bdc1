"""File-backed image source.

Stands in for the camera/gallery bridge in CLI runs and tests: "capturing"
reads a configured file from disk.
"""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

from mealsnap.domain.meal.capture.entities.captured_image import CapturedImage, ImageOrigin
from mealsnap.domain.meal.core.exceptions import CaptureError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileImageSource:
    """
    IImageSource reading pictures from the local filesystem.

    Example:
        >>> source = FileImageSource("lunch.jpg")
        >>> image = await source.capture()
        >>> image.mime_type
        'image/jpeg'
    """

    def __init__(self, capture_path: PathLike, gallery_path: Optional[PathLike] = None):
        """
        Initialize source.

        Args:
            capture_path: File returned by capture()
            gallery_path: File returned by pick() (defaults to capture_path)
        """
        self._capture_path = Path(capture_path)
        self._gallery_path = Path(gallery_path) if gallery_path else self._capture_path

    async def capture(self) -> CapturedImage:
        return await self._read(self._capture_path, ImageOrigin.CAMERA)

    async def pick(self) -> CapturedImage:
        return await self._read(self._gallery_path, ImageOrigin.GALLERY)

    async def _read(self, path: Path, origin: ImageOrigin) -> CapturedImage:
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type is None or not mime_type.startswith("image/"):
            raise CaptureError(f"Not an image file: {path.name}")

        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise CaptureError(f"Cannot read image {path}: {e}") from e

        logger.debug(
            "Image read from disk",
            extra={"path": str(path), "size_bytes": len(data), "origin": origin.value},
        )

        return CapturedImage(data=data, mime_type=mime_type, origin=origin)
