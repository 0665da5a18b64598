"""Keyword table used as the last suggestion step.

The table is plain data: keyword -> preferred target names, in order. The
built-in table lives in ``config.mapping_keywords`` and can be extended from
settings without touching the matching code.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Sequence

from config.mapping_keywords import SUGGESTION_KEYWORDS


class KeywordTable:
    def __init__(self, entries: Mapping[str, Sequence[str]]) -> None:
        self._entries: dict[str, tuple[str, ...]] = {
            keyword.lower(): tuple(names) for keyword, names in entries.items()
        }

    @classmethod
    def default(cls) -> "KeywordTable":
        return cls(SUGGESTION_KEYWORDS)

    def extended(self, extra: Mapping[str, Sequence[str]]) -> "KeywordTable":
        """Return a copy with ``extra`` merged in.

        A keyword already present keeps its position and gets the new list;
        new keywords are appended after the existing ones.
        """
        merged: dict[str, Sequence[str]] = dict(self._entries)
        for keyword, names in extra.items():
            merged[keyword.lower()] = tuple(names)
        return KeywordTable(merged)

    def matching(self, key: str) -> Iterator[tuple[str, tuple[str, ...]]]:
        """Yield (keyword, preferred names) for every keyword contained in ``key``."""
        for keyword, names in self._entries.items():
            if keyword and keyword in key:
                yield keyword, names

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and keyword.lower() in self._entries

    def as_dict(self) -> dict[str, list[str]]:
        return {keyword: list(names) for keyword, names in self._entries.items()}


def keyword_table_from_settings(extra: Mapping[str, Sequence[str]] | None = None) -> KeywordTable:
    table = KeywordTable.default()
    return table.extended(extra) if extra else table


__all__ = ["KeywordTable", "keyword_table_from_settings"]
