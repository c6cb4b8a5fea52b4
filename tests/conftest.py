"""
Shared pytest fixtures for the building analysis tests.

Provides:
- Sample image bytes and files
- A factory for repositories backed by httpx.MockTransport
- Stub collaborators for the use case and API tests
"""

import json
from pathlib import Path
from typing import Callable, List, Tuple

import httpx
import pytest

from building_lens.domain.building import Building
from building_lens.tools.vision import OpenAIBuildingRepository

# JPEG SOI/APP0 markers followed by filler; the adapter never inspects the format.
SAMPLE_IMAGE_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(256)) + b"\xff\xd9"


def chat_completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FixedRepository:
    """Returns the same Building for every image and records the payloads."""

    def __init__(self, building: Building) -> None:
        self.building = building
        self.calls: List[str] = []

    async def analyze_building(self, image_base64: str) -> Building:
        self.calls.append(image_base64)
        return Building.create(self.building.name, self.building.architecture_style, self.building.description)


class FailingRepository:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def analyze_building(self, image_base64: str) -> Building:
        raise self.error


class StaticConverter:
    def __init__(self, payload: str = "aW1hZ2U=") -> None:
        self.payload = payload
        self.handles: List[str] = []

    async def convert_to_base64(self, image_handle: str) -> str:
        self.handles.append(image_handle)
        return self.payload


@pytest.fixture
def image_bytes() -> bytes:
    return SAMPLE_IMAGE_BYTES


@pytest.fixture
def image_file(tmp_path: Path, image_bytes: bytes) -> Path:
    path = tmp_path / "facade.jpg"
    path.write_bytes(image_bytes)
    return path


@pytest.fixture
def eiffel_tower() -> Building:
    return Building.create("Eiffel Tower", "Structural Expressionism", "A wrought-iron lattice tower.")


@pytest.fixture
def make_repository() -> Callable[..., Tuple[OpenAIBuildingRepository, List[httpx.Request]]]:
    """Build a repository whose HTTP traffic is answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs):
        seen: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        repository = OpenAIBuildingRepository(api_key=kwargs.pop("api_key", "sk-test"), client=client, **kwargs)
        return repository, seen

    return factory


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)
