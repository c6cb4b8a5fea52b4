"""Turn an image handle (path, file://, data: or http(s) URI) into base64."""
from __future__ import annotations

import asyncio
import base64
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote_to_bytes, urlparse
from urllib.request import url2pathname

import httpx

from building_lens.domain.errors import ConversionError

logger = logging.getLogger(__name__)


class ImageConverterService:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def convert_to_base64(self, image_handle: str) -> str:
        try:
            try:
                return await self._read_local_file(image_handle)
            except Exception as fs_error:
                logger.debug("Local read failed for %s (%s), fetching instead", image_handle[:80], fs_error)
                return await self._convert_using_fetch(image_handle)
        except Exception as exc:
            logger.error("Error converting image to base64: %s", exc)
            raise ConversionError(cause=exc) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _read_local_file(self, image_handle: str) -> str:
        path = self._local_path(image_handle)
        data = await asyncio.to_thread(path.read_bytes)
        return base64.b64encode(data).decode("ascii")

    def _local_path(self, image_handle: str) -> Path:
        parsed = urlparse(image_handle)
        if parsed.scheme == "file":
            return Path(url2pathname(parsed.path))
        if parsed.scheme and len(parsed.scheme) > 1:
            # Single-letter schemes are Windows drive letters.
            raise ValueError(f"Unsupported scheme for local read: {parsed.scheme}")
        return Path(image_handle)

    async def _convert_using_fetch(self, image_handle: str) -> str:
        if image_handle.startswith("data:"):
            header, _, payload = image_handle.partition(",")
            if ";base64" in header:
                return payload
            return base64.b64encode(unquote_to_bytes(payload)).decode("ascii")

        scheme = urlparse(image_handle).scheme
        if scheme not in ("http", "https"):
            raise ValueError(f"Cannot fetch image handle with scheme {scheme!r}")

        resp = await self._client.get(image_handle)
        resp.raise_for_status()
        return base64.b64encode(resp.content).decode("ascii")
