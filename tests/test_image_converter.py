"""
Tests for converting image handles to base64
"""

import base64

import httpx
import pytest

from building_lens.domain.errors import ConversionError
from building_lens.tools.images import ImageConverterService


def _converter(handler=None) -> ImageConverterService:
    handler = handler or (lambda request: httpx.Response(404))
    return ImageConverterService(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestImageConverterService:
    @pytest.mark.asyncio
    async def test_reads_local_path(self, image_file, image_bytes):
        encoded = await _converter().convert_to_base64(str(image_file))

        assert base64.b64decode(encoded) == image_bytes

    @pytest.mark.asyncio
    async def test_reads_file_uri(self, image_file, image_bytes):
        encoded = await _converter().convert_to_base64(image_file.as_uri())

        assert base64.b64decode(encoded) == image_bytes

    @pytest.mark.asyncio
    async def test_base64_data_uri_strips_prefix(self, image_bytes):
        payload = base64.b64encode(image_bytes).decode("ascii")

        encoded = await _converter().convert_to_base64(f"data:image/jpeg;base64,{payload}")

        assert encoded == payload

    @pytest.mark.asyncio
    async def test_percent_encoded_data_uri(self):
        encoded = await _converter().convert_to_base64("data:text/plain,hello%20world")

        assert base64.b64decode(encoded) == b"hello world"

    @pytest.mark.asyncio
    async def test_fetches_remote_image(self, image_bytes):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=image_bytes, headers={"Content-Type": "image/jpeg"})

        encoded = await _converter(handler).convert_to_base64("https://images.example.com/facade.jpg")

        assert base64.b64decode(encoded) == image_bytes
        assert len(seen) == 1
        assert seen[0].method == "GET"

    @pytest.mark.asyncio
    async def test_missing_file_raises_conversion_error(self, tmp_path):
        with pytest.raises(ConversionError) as exc_info:
            await _converter().convert_to_base64(str(tmp_path / "missing.jpg"))

        assert exc_info.value.message == "Failed to convert image to base64"
        assert exc_info.value.cause is not None

    @pytest.mark.asyncio
    async def test_remote_error_status_raises_conversion_error(self):
        converter = _converter(lambda request: httpx.Response(403))

        with pytest.raises(ConversionError, match="Failed to convert image to base64"):
            await converter.convert_to_base64("https://images.example.com/private.jpg")

    @pytest.mark.asyncio
    async def test_unsupported_scheme_raises_conversion_error(self):
        with pytest.raises(ConversionError):
            await _converter().convert_to_base64("content://media/external/images/1")

    @pytest.mark.asyncio
    async def test_empty_file_is_not_validated(self, tmp_path):
        path = tmp_path / "empty.jpg"
        path.write_bytes(b"")

        assert await _converter().convert_to_base64(str(path)) == ""
