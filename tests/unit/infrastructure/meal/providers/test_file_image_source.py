"""Unit tests for FileImageSource."""

import pytest

from mealsnap.domain.meal.capture.entities.captured_image import ImageOrigin
from mealsnap.domain.meal.core.exceptions import CaptureError
from mealsnap.infrastructure.meal.providers.file_image_source import FileImageSource


@pytest.fixture
def photo(tmp_path, jpeg_bytes):
    path = tmp_path / "lunch.jpg"
    path.write_bytes(jpeg_bytes)
    return path


class TestFileImageSource:
    @pytest.mark.asyncio
    async def test_capture_reads_file(self, photo, jpeg_bytes):
        image = await FileImageSource(photo).capture()

        assert image.data == jpeg_bytes
        assert image.mime_type == "image/jpeg"
        assert image.origin is ImageOrigin.CAMERA

    @pytest.mark.asyncio
    async def test_pick_uses_gallery_path(self, photo, tmp_path):
        gallery = tmp_path / "dinner.png"
        gallery.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 8)

        image = await FileImageSource(photo, gallery_path=gallery).pick()

        assert image.mime_type == "image/png"
        assert image.origin is ImageOrigin.GALLERY

    @pytest.mark.asyncio
    async def test_pick_defaults_to_capture_path(self, photo, jpeg_bytes):
        image = await FileImageSource(photo).pick()

        assert image.data == jpeg_bytes

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(CaptureError, match="Cannot read image"):
            await FileImageSource(tmp_path / "missing.jpg").capture()

    @pytest.mark.asyncio
    async def test_not_an_image(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")

        with pytest.raises(CaptureError, match="Not an image"):
            await FileImageSource(notes).capture()

    @pytest.mark.asyncio
    async def test_empty_file(self, tmp_path):
        empty = tmp_path / "empty.jpg"
        empty.write_bytes(b"")

        with pytest.raises(CaptureError, match="empty"):
            await FileImageSource(empty).capture()
