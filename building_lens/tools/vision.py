"""Building identification via an OpenAI-compatible vision chat endpoint."""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from building_lens.analysis.parsing import parse_building_content
from building_lens.analysis.prompts import BUILDING_ANALYSIS_PROMPT
from building_lens.domain.building import Building
from building_lens.domain.errors import AnalysisError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 500


class OpenAIBuildingRepository:
    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model or DEFAULT_MODEL
        self._max_tokens = max_tokens or DEFAULT_MAX_TOKENS
        self._api_url = api_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def model(self) -> str:
        return self._model

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    async def analyze_building(self, image_base64: str) -> Building:
        payload = await self._call_api(image_base64)
        return parse_building_content(self._message_content(payload))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def build_request_body(self, image_base64: str) -> dict:
        return {
            "model": self._model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": BUILDING_ANALYSIS_PROMPT},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"},
                        },
                    ],
                }
            ],
            "max_tokens": self._max_tokens,
        }

    async def _call_api(self, image_base64: str) -> dict:
        logger.info(
            "Requesting building analysis (model=%s, payload=%d chars)", self._model, len(image_base64)
        )
        try:
            resp = await self._client.post(
                self._api_url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self._api_key}",
                },
                json=self.build_request_body(image_base64),
            )
        except httpx.HTTPError as exc:
            logger.warning("Analysis request failed: %s", exc)
            raise AnalysisError(f"Failed to analyze building: {str(exc) or type(exc).__name__}") from exc

        if not resp.is_success:
            message = self._error_message(resp)
            logger.warning("Analysis endpoint returned %s: %s", resp.status_code, message)
            raise AnalysisError(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise AnalysisError(f"Failed to analyze building: {exc}") from exc

    def _error_message(self, resp: httpx.Response) -> str:
        fallback = f"API error: {resp.status_code}"
        try:
            body = resp.json()
        except ValueError:
            return fallback
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return fallback

    def _message_content(self, payload: Any) -> str:
        if not isinstance(payload, dict):
            return ""
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message") or {}
        content = message.get("content") if isinstance(message, dict) else None
        return content if isinstance(content, str) else ""
