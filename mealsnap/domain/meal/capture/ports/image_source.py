"""Port (interface) for image acquisition.

Camera and gallery access live outside the core; adapters implement this
contract so the workflow coordinator can drive acquisition.
"""

from typing import Protocol

from mealsnap.domain.meal.capture.entities.captured_image import CapturedImage


class IImageSource(Protocol):
    """
    Interface for camera / gallery adapters.

    Implementations can be:
    - Device camera bridge (mobile client)
    - Local file reader (CLI, tests)
    """

    async def capture(self) -> CapturedImage:
        """
        Take a new picture.

        Returns:
            CapturedImage with the raw bytes

        Raises:
            CaptureError: If no image could be acquired
        """
        ...

    async def pick(self) -> CapturedImage:
        """
        Select an existing picture from the gallery.

        Returns:
            CapturedImage with the raw bytes

        Raises:
            CaptureError: If selection failed or was cancelled
        """
        ...
