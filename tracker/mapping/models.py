"""Mapping rows and persisted mapping presets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.mapping_keywords import SKIP_LABEL
from tracker.exceptions import MappingError

SKIP = SKIP_LABEL


@dataclass
class MappingRow:
    """One source field and the target currently chosen for it."""
    source_field: str
    candidate_targets: List[str] = field(default_factory=lambda: [SKIP])
    target_field: str = SKIP

    @property
    def is_skipped(self) -> bool:
        return self.target_field == SKIP or not self.target_field.strip()

    def offers(self, target: str) -> bool:
        return target in self.candidate_targets

    def select(self, target: str) -> None:
        if not self.offers(target):
            raise MappingError(
                f"'{target}' is not a candidate for '{self.source_field}'",
                {"source_field": self.source_field, "target": target},
            )
        self.target_field = target


class MappingPair(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_field: str = Field(..., alias="sourceColumn")
    target_field: str = Field(..., alias="targetParameter")


class MappingPreset(BaseModel):
    """Named set of source -> target choices, stored as one JSON document."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    pairs: List[MappingPair] = Field(..., alias="mappings")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("preset name must not be blank")
        return value

    @classmethod
    def from_rows(cls, name: str, rows: List[MappingRow]) -> "MappingPreset":
        return cls(
            name=name,
            pairs=[MappingPair(source_field=row.source_field, target_field=row.target_field) for row in rows],
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


__all__ = ["SKIP", "MappingRow", "MappingPair", "MappingPreset"]
