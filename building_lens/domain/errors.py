"""Error types surfaced by the analysis flow."""
from __future__ import annotations

from typing import Optional


class BuildingLensError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConversionError(BuildingLensError):
    """Image bytes could not be read or encoded."""

    DEFAULT_MESSAGE = "Failed to convert image to base64"

    def __init__(self, message: str = DEFAULT_MESSAGE, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class AnalysisError(BuildingLensError):
    """The inference endpoint could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OrchestrationError(BuildingLensError):
    """Raised by the use case; the only error callers need to handle."""
