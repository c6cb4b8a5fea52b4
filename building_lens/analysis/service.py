"""Use case that turns an image handle into a Building."""
from __future__ import annotations

import logging

from building_lens.domain.building import Building
from building_lens.domain.errors import OrchestrationError
from building_lens.domain.interfaces import BuildingRepository, ImageConverter

logger = logging.getLogger(__name__)


class AnalyzeBuildingUseCase:
    """Converts the image, then asks the repository to identify the building."""

    def __init__(self, building_repository: BuildingRepository, image_converter: ImageConverter) -> None:
        self.building_repository = building_repository
        self.image_converter = image_converter

    async def execute(self, image_handle: str) -> Building:
        try:
            image_base64 = await self.image_converter.convert_to_base64(image_handle)
            building = await self.building_repository.analyze_building(image_base64)
        except Exception as exc:
            message = getattr(exc, "message", None) or str(exc) or "Unknown error"
            logger.info("Building analysis failed for %s: %s", image_handle[:80], message)
            raise OrchestrationError(f"Failed to analyze building: {message}") from exc

        logger.info(
            "Building analysis complete (name=%s, style=%s)",
            building.has_name(),
            building.has_architecture_style(),
        )
        return building
