"""Collaborator contracts for the analysis flow."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from building_lens.domain.building import Building


@runtime_checkable
class ImageConverter(Protocol):
    async def convert_to_base64(self, image_handle: str) -> str:
        """Return the bytes behind ``image_handle`` as a base64 string."""
        ...


@runtime_checkable
class BuildingRepository(Protocol):
    async def analyze_building(self, image_base64: str) -> Building:
        """Identify the building shown in a base64-encoded image."""
        ...
