"""Comparison records produced by a version diff."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from tracker.exceptions import ChangeRecordError


class ChangeCategory(str, Enum):
    """How an entity differs between the snapshot and the current model."""
    NEW = "New"
    MODIFIED = "Modified"
    DELETED = "Deleted"


class ChangeFilter(str, Enum):
    """Category selector of the result view."""
    ALL = "All Changes"
    NEW_ONLY = "New Only"
    MODIFIED_ONLY = "Modified Only"
    DELETED_ONLY = "Deleted Only"

    @property
    def category(self) -> ChangeCategory | None:
        return _FILTER_CATEGORIES[self]

    @classmethod
    def parse(cls, value: "ChangeFilter | str | None") -> "ChangeFilter":
        """Accept a member, its label ("New Only") or its name ("NewOnly", "new_only")."""
        if value is None:
            return cls.ALL
        if isinstance(value, cls):
            return value
        key = _squash(str(value))
        if key == "all":
            return cls.ALL
        for member in cls:
            if key in (_squash(member.value), _squash(member.name)):
                return member
        raise ValueError(f"Unknown change filter: {value!r}")


def _squash(text: str) -> str:
    return text.strip().lower().replace(" ", "").replace("_", "")


_FILTER_CATEGORIES: dict[ChangeFilter, ChangeCategory | None] = {
    ChangeFilter.ALL: None,
    ChangeFilter.NEW_ONLY: ChangeCategory.NEW,
    ChangeFilter.MODIFIED_ONLY: ChangeCategory.MODIFIED,
    ChangeFilter.DELETED_ONLY: ChangeCategory.DELETED,
}


def summarize_changes(count: int) -> str:
    return f"{count} parameter(s) changed" if count > 0 else "No parameter changes"


@dataclass(frozen=True)
class ChangeDescriptor:
    """One parameter's old and new value."""
    field_name: str
    old_value: str = ""
    new_value: str = ""


class ChangeRecord(BaseModel):
    """One tracked entity's delta between two versions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: ChangeCategory
    identifier: str = Field("", alias="trackId", description="Stable track id")
    secondary_label: str = Field("", alias="secondaryLabel", description="Room number or mark")
    tertiary_label: str = Field("", alias="tertiaryLabel", description="Room name or family/type")
    changes: tuple[str, ...] = Field(default_factory=tuple, description="Encoded parameter changes")

    @field_validator("identifier", "secondary_label", "tertiary_label", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("changes", mode="before")
    @classmethod
    def _none_to_tuple(cls, value: Any) -> Any:
        return () if value is None else value

    @model_validator(mode="after")
    def _changes_only_when_modified(self) -> "ChangeRecord":
        if self.changes and self.category is not ChangeCategory.MODIFIED:
            raise ValueError(
                f"{self.category.value} record {self.identifier!r} carries "
                f"{len(self.changes)} parameter change(s); only Modified records may"
            )
        return self

    @property
    def changes_summary(self) -> str:
        return summarize_changes(len(self.changes))

    @property
    def display_name(self) -> str:
        return f"{self.secondary_label} - {self.tertiary_label}"


@dataclass(frozen=True)
class ComparisonSummary:
    new: int = 0
    modified: int = 0
    deleted: int = 0

    @property
    def total(self) -> int:
        return self.new + self.modified + self.deleted

    @classmethod
    def from_records(cls, records: Iterable[ChangeRecord]) -> "ComparisonSummary":
        counts = {category: 0 for category in ChangeCategory}
        for record in records:
            counts[record.category] += 1
        return cls(
            new=counts[ChangeCategory.NEW],
            modified=counts[ChangeCategory.MODIFIED],
            deleted=counts[ChangeCategory.DELETED],
        )


def load_records(items: Sequence[ChangeRecord | dict[str, Any]]) -> list[ChangeRecord]:
    """Accept records from a diff source, validating each one.

    Raises:
        ChangeRecordError: On the first item that is not a valid record. The
            offending position is reported in ``details["index"]``.
    """
    records: list[ChangeRecord] = []
    for index, item in enumerate(items):
        if isinstance(item, ChangeRecord):
            records.append(item)
            continue
        try:
            records.append(ChangeRecord.model_validate(item))
        except ValidationError as exc:
            raise ChangeRecordError(
                f"Invalid comparison record at position {index}: {exc}",
                {"index": str(index)},
            ) from exc
    return records


__all__ = [
    "ChangeCategory",
    "ChangeFilter",
    "ChangeDescriptor",
    "ChangeRecord",
    "ComparisonSummary",
    "load_records",
    "summarize_changes",
]
