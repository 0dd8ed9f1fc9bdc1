"""CapturedImage entity - transient photo owned by the active session."""

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from mealsnap.domain.meal.core.exceptions import CaptureError


class ImageOrigin(str, Enum):
    """Where the image came from."""

    CAMERA = "camera"
    GALLERY = "gallery"
    FILE = "file"


@dataclass(frozen=True)
class CapturedImage:
    """
    Entity: raw image bytes acquired from camera, gallery or disk.

    Owned by the active session only and dropped when the session is
    cleared. ``repr`` never includes the payload.

    Raises:
        CaptureError: If the payload is empty
    """

    data: bytes = field(repr=False)
    mime_type: str = "image/jpeg"
    origin: ImageOrigin = ImageOrigin.CAMERA
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.data:
            raise CaptureError("Captured image is empty")

        if not self.mime_type.startswith("image/"):
            raise CaptureError(f"Unsupported image type: {self.mime_type}")

    @property
    def size_bytes(self) -> int:
        """Payload size."""
        return len(self.data)

    def to_base64(self) -> str:
        """Base64 payload (no data-URL prefix)."""
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Data URL suitable for vision APIs that accept inline images."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"
