"""Building value object returned by every analysis."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

NO_INFORMATION = "No information available."


@dataclass(frozen=True)
class Building:
    name: Optional[str]
    architecture_style: Optional[str]
    description: str

    def __post_init__(self) -> None:
        if self.description is None:
            raise ValueError("Building description must be a string")

    @classmethod
    def create(
        cls,
        name: Optional[str],
        architecture_style: Optional[str],
        description: str,
    ) -> "Building":
        return cls(name=name, architecture_style=architecture_style, description=description)

    @classmethod
    def empty(cls) -> "Building":
        return cls(name=None, architecture_style=None, description=NO_INFORMATION)

    def has_name(self) -> bool:
        return self.name is not None and len(self.name.strip()) > 0

    def has_architecture_style(self) -> bool:
        return self.architecture_style is not None and len(self.architecture_style.strip()) > 0

    def to_dict(self) -> dict:
        return asdict(self)
