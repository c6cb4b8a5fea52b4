"""Pydantic schemas shared across API layers."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from building_lens.domain.building import Building


class AnalyzeRequest(BaseModel):
    image_id: Optional[str] = None
    image_uri: Optional[str] = None

    @field_validator("image_uri")
    @classmethod
    def _inline_images_only(cls, value: Optional[str]) -> Optional[str]:
        # Only inline images; server files are reachable solely via an upload image_id.
        if value and not value.startswith("data:"):
            raise ValueError("image_uri must be a data: URI; upload files to obtain an image_id")
        return value

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "AnalyzeRequest":
        if bool(self.image_id) == bool(self.image_uri):
            raise ValueError("Provide exactly one of image_id or image_uri")
        return self


class BuildingResponse(BaseModel):
    building_name: Optional[str] = None
    architecture_style: Optional[str] = None
    description: str
    has_name: bool
    has_architecture_style: bool
    image_id: Optional[str] = None

    @classmethod
    def from_building(cls, building: Building, image_id: Optional[str] = None) -> "BuildingResponse":
        return cls(
            building_name=building.name,
            architecture_style=building.architecture_style,
            description=building.description,
            has_name=building.has_name(),
            has_architecture_style=building.has_architecture_style(),
            image_id=image_id,
        )


class ImageUploadResponse(BaseModel):
    image_id: str
    filename: str
    content_type: str
    size_bytes: int


class HealthResponse(BaseModel):
    status: str
    environment: str
    model: str
    version: str = "0.1.0"
