"""Composition root wiring the analysis client, image adapter and use case."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from building_lens.analysis.service import AnalyzeBuildingUseCase
from building_lens.app.config import Settings, get_settings
from building_lens.domain.interfaces import BuildingRepository, ImageConverter
from building_lens.tools.images import ImageConverterService
from building_lens.tools.vision import OpenAIBuildingRepository


class ServiceContainer:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        repository: Optional[BuildingRepository] = None,
        converter: Optional[ImageConverter] = None,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._converter = converter
        self._use_case: Optional[AnalyzeBuildingUseCase] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def building_repository(self) -> BuildingRepository:
        if self._repository is None:
            settings = self.settings
            self._repository = OpenAIBuildingRepository(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                max_tokens=settings.openai_max_tokens,
                api_url=settings.openai_api_url,
                timeout=settings.request_timeout_seconds,
            )
        return self._repository

    @property
    def image_converter(self) -> ImageConverter:
        if self._converter is None:
            self._converter = ImageConverterService(timeout=self.settings.request_timeout_seconds)
        return self._converter

    @property
    def analyze_building_use_case(self) -> AnalyzeBuildingUseCase:
        if self._use_case is None:
            self._use_case = AnalyzeBuildingUseCase(self.building_repository, self.image_converter)
        return self._use_case

    def set_building_repository(self, repository: BuildingRepository) -> None:
        self._repository = repository
        self._use_case = None

    def set_image_converter(self, converter: ImageConverter) -> None:
        self._converter = converter
        self._use_case = None

    def reset(self) -> None:
        """Forget cached instances without closing them; use aclose() to release clients."""
        self._repository = None
        self._converter = None
        self._use_case = None

    async def aclose(self) -> None:
        for component in (self._repository, self._converter):
            close = getattr(component, "aclose", None)
            if close is not None:
                await close()
        self.reset()


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    return ServiceContainer()
