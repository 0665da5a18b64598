"""Category and free-text filtering of comparison results."""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from tracker.compare.models import ChangeFilter, ChangeRecord, summarize_changes


def matches_query(record: ChangeRecord, query: str) -> bool:
    """Case-insensitive substring match against the record's visible columns."""
    needle = query.strip().lower()
    if not needle:
        return True
    haystacks = (
        record.identifier,
        record.secondary_label,
        record.tertiary_label,
        record.changes_summary,
    )
    return any(needle in text.lower() for text in haystacks)


def filter_records(
    records: Iterable[ChangeRecord],
    category: ChangeFilter | str = ChangeFilter.ALL,
    query: str | None = None,
) -> list[ChangeRecord]:
    """Return the records passing both the category and the text filter.

    Always evaluated against the full ``records`` sequence, so repeated calls
    with the same arguments give the same view regardless of earlier filters.
    Relative order is preserved.

    Args:
        records: Complete, unfiltered comparison result.
        category: Category selector; a label such as ``"Modified Only"`` is accepted.
        query: Optional search text. Blank text disables the text filter.

    Returns:
        New list with the matching records.
    """
    selector = ChangeFilter.parse(category)
    wanted = selector.category
    text = (query or "").strip()

    filtered = [
        record
        for record in records
        if (wanted is None or record.category is wanted)
        and (not text or matches_query(record, text))
    ]
    logger.debug(
        "Filter {} / {!r}: {} record(s) shown",
        selector.value,
        text,
        len(filtered),
    )
    return filtered


__all__ = ["filter_records", "matches_query", "summarize_changes"]
