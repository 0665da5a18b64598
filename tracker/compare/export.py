"""Tabular and plain-text export of comparison results.

Every writer emits the same seven columns. A Modified record yields one row
per decoded parameter change; New and Deleted records, and Modified records
without detail, yield a single row with the parameter columns left empty.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from loguru import logger
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from tracker.compare.descriptor import decode
from tracker.compare.models import ChangeCategory, ChangeRecord, ComparisonSummary
from tracker.exceptions import ExportError
from tracker.storage.local import write_atomic

EXPORT_HEADER = (
    "Change Type",
    "Track ID",
    "Room Number",
    "Room Name",
    "Parameter Name",
    "Old Value",
    "New Value",
)

SHEET_TITLE = "Comparison Results"
HEADER_FILL = "D3D3D3"  # light gray


def iter_export_rows(records: Iterable[ChangeRecord]) -> Iterator[tuple[str, ...]]:
    for record in records:
        prefix = (
            record.category.value,
            record.identifier,
            record.secondary_label,
            record.tertiary_label,
        )
        if record.category is ChangeCategory.MODIFIED and record.changes:
            for line in record.changes:
                change = decode(line)
                yield prefix + (change.field_name, change.old_value, change.new_value)
        else:
            yield prefix + ("", "", "")


def write_csv(
    records: Iterable[ChangeRecord],
    path: Path,
    *,
    encoding: str = "utf-8-sig",
) -> int:
    """Write records as CSV and return the number of data rows.

    The default encoding carries a BOM so spreadsheet applications detect UTF-8.
    """
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADER)
    count = 0
    for row in iter_export_rows(records):
        writer.writerow(row)
        count += 1

    try:
        write_atomic(path, buffer.getvalue().encode(encoding))
    except (OSError, LookupError) as exc:
        raise ExportError(f"Failed to export CSV: {exc}", {"path": str(path)}) from exc
    logger.info("Exported {} row(s) to {}", count, path)
    return count


def autosize_columns(ws: Worksheet, max_width: int = 60) -> None:
    for col_idx, col_cells in enumerate(ws.columns, start=1):
        max_len = 0
        for cell in col_cells:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, max_width)


def write_xlsx(records: Iterable[ChangeRecord], path: Path) -> int:
    """Write records to a single-sheet workbook and return the number of data rows."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append(list(EXPORT_HEADER))

    count = 0
    for row in iter_export_rows(records):
        # Empty parameter columns stay blank cells rather than empty strings
        ws.append([value if value != "" else None for value in row])
        count += 1

    fill = PatternFill(fill_type="solid", start_color=HEADER_FILL, end_color=HEADER_FILL)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = fill
    ws.freeze_panes = "A2"
    autosize_columns(ws)

    payload = io.BytesIO()
    wb.save(payload)
    try:
        write_atomic(path, payload.getvalue())
    except OSError as exc:
        raise ExportError(f"Failed to export Excel: {exc}", {"path": str(path)}) from exc
    logger.info("Exported {} row(s) to {}", count, path)
    return count


def format_report_text(
    all_records: Sequence[ChangeRecord],
    shown_records: Sequence[ChangeRecord] | None = None,
    *,
    version_name: str,
    entity_label: str = "Room",
    generated_at: datetime | None = None,
) -> str:
    """Plain-text report for pasting elsewhere.

    Counts cover ``all_records``; the detail section lists ``shown_records``
    (the current filtered view), defaulting to every record.
    """
    summary = ComparisonSummary.from_records(all_records)
    shown = all_records if shown_records is None else shown_records
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    plural = f"{entity_label}s"

    lines = [
        f"{entity_label} Comparison Results - {version_name}",
        f"Generated: {stamp}",
        "",
        f"New {plural}: {summary.new}",
        f"Modified {plural}: {summary.modified}",
        f"Deleted {plural}: {summary.deleted}",
        "",
        "Details:",
        "========",
    ]
    for record in shown:
        lines.append("")
        lines.append(
            f"[{record.category.value}] {record.identifier} - "
            f"{record.secondary_label} - {record.tertiary_label}"
        )
        lines.extend(f"  • {change}" for change in record.changes)
    return "\n".join(lines) + "\n"


def default_export_filename(
    version_name: str,
    extension: str,
    *,
    prefix: str = "RoomComparison",
    now: datetime | None = None,
) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    safe_version = "".join("_" if ch in '<>:"/\\|?*' else ch for ch in version_name)
    return f"{prefix}_{safe_version}_{stamp}.{extension.lstrip('.')}"


__all__ = [
    "EXPORT_HEADER",
    "iter_export_rows",
    "write_csv",
    "write_xlsx",
    "format_report_text",
    "default_export_filename",
]
