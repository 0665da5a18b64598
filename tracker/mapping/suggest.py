"""
Field Mapping Suggestions

Proposes a target parameter for each source parameter when converting filled
regions into rooms. Steps are tried in order and the first hit wins:

1. exact name, ignoring case
2. same name once common prefixes are removed (``Room_Name`` -> ``Name``)
3. keyword table (``..._dept_name`` contains ``name`` -> ``Name``/``Room Name``)
4. skip

An unmatched field is always mapped to the skip choice rather than guessed.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from loguru import logger

from tracker.mapping.keywords import KeywordTable
from tracker.mapping.models import SKIP, MappingRow

SOURCE_PREFIXES = ("region_", "space_", "room_", "fr_")
TARGET_PREFIXES = ("room_", "space_")


def _strip_prefixes(text: str, prefixes: Sequence[str]) -> str:
    stripped = True
    while stripped:
        stripped = False
        for prefix in prefixes:
            if text.startswith(prefix):
                text = text[len(prefix):]
                stripped = True
    return text


def normalize_source(name: str) -> str:
    return _strip_prefixes(name.strip().lower(), SOURCE_PREFIXES)


def normalize_target(name: str) -> str:
    return _strip_prefixes(name.strip().lower(), TARGET_PREFIXES)


def suggest_target(
    source_field: str,
    target_vocabulary: Sequence[str],
    keywords: KeywordTable | None = None,
) -> str:
    """Suggest the target parameter for ``source_field``.

    Args:
        source_field: Parameter name on the source element.
        target_vocabulary: Parameter names available on the target element.
        keywords: Keyword table for the fallback step (built-in table if None).

    Returns:
        A name from ``target_vocabulary`` in its original spelling, or the
        skip choice when nothing matches.
    """
    targets = [name for name in target_vocabulary if name != SKIP]

    wanted = source_field.lower()
    for name in targets:
        if name.lower() == wanted:
            return name

    key = normalize_source(source_field)
    for name in targets:
        if normalize_target(name) == key:
            return name

    table = keywords or KeywordTable.default()
    by_lower = {}
    for name in targets:
        by_lower.setdefault(name.lower(), name)
    for _keyword, preferred in table.matching(key):
        for candidate in preferred:
            match = by_lower.get(candidate.lower())
            if match is not None:
                return match

    return SKIP


def build_rows(
    source_fields: Iterable[str],
    target_vocabulary: Sequence[str],
    keywords: KeywordTable | None = None,
) -> List[MappingRow]:
    """One row per distinct source field, pre-filled with a suggestion."""
    table = keywords or KeywordTable.default()
    candidates = [SKIP] + [name for name in target_vocabulary if name != SKIP]

    rows: List[MappingRow] = []
    seen: set[str] = set()
    for source in source_fields:
        if source in seen:
            logger.warning("Duplicate source parameter '{}' ignored", source)
            continue
        seen.add(source)
        rows.append(
            MappingRow(
                source_field=source,
                candidate_targets=list(candidates),
                target_field=suggest_target(source, candidates, table),
            )
        )

    suggested = sum(1 for row in rows if not row.is_skipped)
    logger.debug("Suggested targets for {}/{} source parameter(s)", suggested, len(rows))
    return rows


def final_mappings(rows: Iterable[MappingRow]) -> Dict[str, str]:
    """Source -> target for every row that is actually mapped."""
    return {row.source_field: row.target_field for row in rows if not row.is_skipped}


__all__ = [
    "SOURCE_PREFIXES",
    "TARGET_PREFIXES",
    "normalize_source",
    "normalize_target",
    "suggest_target",
    "build_rows",
    "final_mappings",
]
