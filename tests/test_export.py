"""Tests for comparison result export."""

import csv
from datetime import datetime
from pathlib import Path

import pytest

from tracker.compare.export import (
    EXPORT_HEADER,
    default_export_filename,
    format_report_text,
    iter_export_rows,
    write_csv,
    write_xlsx,
)
from tracker.compare.models import ChangeCategory, ChangeRecord
from tracker.exceptions import ExportError


@pytest.fixture
def records() -> list[ChangeRecord]:
    return [
        ChangeRecord(category=ChangeCategory.NEW, identifier="T1", secondary_label="101", tertiary_label="Office"),
        ChangeRecord(
            category=ChangeCategory.MODIFIED,
            identifier="T2",
            secondary_label="102",
            tertiary_label="Meeting, large",
            changes=["Area: '12' → '14'", "Comments: '' → 'Checked'"],
        ),
        ChangeRecord(category=ChangeCategory.MODIFIED, identifier="T3", secondary_label="103", tertiary_label="Lobby"),
        ChangeRecord(category=ChangeCategory.DELETED, identifier="T4", secondary_label="104", tertiary_label="Storage"),
    ]


def test_header_columns():
    """Test the column order expected by downstream spreadsheets."""
    assert EXPORT_HEADER == (
        "Change Type",
        "Track ID",
        "Room Number",
        "Room Name",
        "Parameter Name",
        "Old Value",
        "New Value",
    )


def test_rows_per_category(records):
    """Test New/Deleted get one empty-parameter row, Modified one row per change."""
    rows = list(iter_export_rows(records))
    assert rows == [
        ("New", "T1", "101", "Office", "", "", ""),
        ("Modified", "T2", "102", "Meeting, large", "Area", "12", "14"),
        ("Modified", "T2", "102", "Meeting, large", "Comments", "", "Checked"),
        ("Modified", "T3", "103", "Lobby", "", "", ""),
        ("Deleted", "T4", "104", "Storage", "", "", ""),
    ]


def test_rows_with_degraded_change():
    """Test that an unparseable change still produces a row."""
    record = ChangeRecord(category=ChangeCategory.MODIFIED, identifier="T9", changes=["Placement changed"])
    assert list(iter_export_rows([record])) == [("Modified", "T9", "", "", "Placement changed", "", "")]


def test_write_csv(tmp_path: Path, records):
    """Test CSV output is readable back with the csv module."""
    path = tmp_path / "out.csv"
    count = write_csv(records, path)
    assert count == 5

    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")

    with path.open(encoding="utf-8-sig", newline="") as fp:
        rows = list(csv.reader(fp))
    assert tuple(rows[0]) == EXPORT_HEADER
    assert rows[2] == ["Modified", "T2", "102", "Meeting, large", "Area", "12", "14"]
    assert len(rows) == 6


def test_write_csv_missing_directory(tmp_path: Path, records):
    """Test that a failed export raises ExportError and leaves nothing behind."""
    path = tmp_path / "missing" / "out.csv"
    with pytest.raises(ExportError):
        write_csv(records, path)
    assert not path.exists()


def test_write_xlsx(tmp_path: Path, records):
    """Test the workbook layout."""
    openpyxl = pytest.importorskip("openpyxl")
    path = tmp_path / "out.xlsx"
    assert write_xlsx(records, path) == 5

    wb = openpyxl.load_workbook(path)
    ws = wb["Comparison Results"]
    assert tuple(cell.value for cell in ws[1]) == EXPORT_HEADER
    assert ws["A1"].font.bold
    assert [cell.value for cell in ws[3]] == ["Modified", "T2", "102", "Meeting, large", "Area", "12", "14"]
    assert ws["E2"].value is None
    assert ws.max_row == 6


def test_report_text(records):
    """Test the clipboard report lists counts for all and details for shown records."""
    text = format_report_text(
        records,
        records[1:2],
        version_name="v2",
        generated_at=datetime(2024, 5, 1, 9, 30, 0),
    )
    lines = text.splitlines()
    assert lines[0] == "Room Comparison Results - v2"
    assert lines[1] == "Generated: 2024-05-01 09:30:00"
    assert "New Rooms: 1" in lines
    assert "Modified Rooms: 2" in lines
    assert "Deleted Rooms: 1" in lines
    assert "[Modified] T2 - 102 - Meeting, large" in lines
    assert "  • Area: '12' → '14'" in lines
    assert "[New] T1 - 101 - Office" not in lines


def test_default_export_filename():
    """Test the timestamped file name."""
    name = default_export_filename("v1/final", "csv", now=datetime(2024, 1, 2, 3, 4, 5))
    assert name == "RoomComparison_v1_final_20240102_030405.csv"
    assert default_export_filename("v1", ".xlsx", prefix="DoorComparison", now=datetime(2024, 1, 2)).endswith(
        "DoorComparison_v1_20240102_000000.xlsx"
    )
