from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from tracker.compare.export import default_export_filename, format_report_text, write_csv, write_xlsx
from tracker.compare.filtering import filter_records
from tracker.compare.models import ChangeFilter, ChangeRecord, ComparisonSummary, load_records
from tracker.settings import ExportSettings


class ComparisonSession:
    """Owns one comparison result and the view currently shown to the user.

    The record snapshot never changes. Every filter change recomputes the view
    from the full snapshot and replaces it.
    """

    def __init__(
        self,
        records: Sequence[ChangeRecord | dict[str, Any]],
        version_name: str,
        *,
        entity_label: str = "Room",
        export_settings: ExportSettings | None = None,
    ) -> None:
        self.export_settings = export_settings or ExportSettings()
        self.records: tuple[ChangeRecord, ...] = tuple(load_records(records))
        self.version_name = version_name
        self.entity_label = entity_label
        self.summary = ComparisonSummary.from_records(self.records)
        self.category = ChangeFilter.ALL
        self.query = ""
        self.view: list[ChangeRecord] = list(self.records)
        logger.info(
            "Comparison against '{}': {} new, {} modified, {} deleted",
            version_name,
            self.summary.new,
            self.summary.modified,
            self.summary.deleted,
        )

    @property
    def has_changes(self) -> bool:
        return self.summary.total > 0

    def version_info(self, generated_at: datetime | None = None) -> str:
        stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"{self.entity_label.upper()} Comparison | Version: {self.version_name} "
            f"| Generated: {stamp}"
        )

    def apply_filter(
        self,
        category: ChangeFilter | str | None = None,
        query: str | None = None,
    ) -> list[ChangeRecord]:
        """Update whichever criteria are given and return the new view."""
        if category is not None:
            self.category = ChangeFilter.parse(category)
        if query is not None:
            self.query = query
        self.view = filter_records(self.records, self.category, self.query)
        return self.view

    def export_csv(self, directory: Path) -> Path:
        """Write every record, whatever the current filter, to a timestamped CSV in ``directory``."""
        path = directory / default_export_filename(
            self.version_name, "csv", prefix=self.export_settings.file_prefix
        )
        write_csv(self.records, path, encoding=self.export_settings.csv_encoding)
        return path

    def export_xlsx(self, path: Path) -> Path:
        write_xlsx(self.records, path)
        return path

    def report_text(self, generated_at: datetime | None = None) -> str:
        return format_report_text(
            self.records,
            self.view,
            version_name=self.version_name,
            entity_label=self.entity_label,
            generated_at=generated_at,
        )


__all__ = ["ComparisonSession"]
