"""Best-effort extraction of building details from free-form model output."""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from building_lens.domain.building import Building

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available."
UNABLE_TO_ANALYZE = "Unable to analyze the building."

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> Optional[dict]:
    """Return the first JSON object embedded in ``text``, or None.

    Models wrap their answer in prose or markdown fences, so every ``{`` is
    tried as the start of an object and the decoder decides where it ends.
    """
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None


def _optional_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


def parse_building_content(content: str) -> Building:
    parsed = extract_json_object(content) if content else None
    if parsed is not None:
        return Building.create(
            _optional_text(parsed.get("buildingName")),
            _optional_text(parsed.get("architectureStyle")),
            _optional_text(parsed.get("description")) or NO_DESCRIPTION,
        )

    # Fallback: surface the raw answer rather than failing the analysis.
    logger.warning("Failed to parse JSON from model response (%d chars)", len(content or ""))
    return Building.create(None, None, content or UNABLE_TO_ANALYZE)
