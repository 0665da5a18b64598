from __future__ import annotations

from typing import Dict, List, Sequence

from loguru import logger

from tracker.mapping.keywords import KeywordTable, keyword_table_from_settings
from tracker.mapping.models import MappingPreset, MappingRow
from tracker.mapping.presets import PresetStore, apply_preset
from tracker.mapping.suggest import build_rows, final_mappings
from tracker.settings import get_settings


class MappingSession:
    """Mapping table for one filled region to room conversion.

    Rows change only through ``select`` or by applying a preset. Loading a
    preset that fails for any reason leaves the rows untouched.
    """

    def __init__(
        self,
        source_fields: Sequence[str],
        target_vocabulary: Sequence[str],
        store: PresetStore | None = None,
        *,
        keywords: KeywordTable | None = None,
    ) -> None:
        if store is None:
            settings = get_settings()
            store = PresetStore.from_settings(settings)
            if keywords is None:
                keywords = keyword_table_from_settings(settings.mapping.keywords)
        self.store = store
        self.rows: List[MappingRow] = build_rows(source_fields, target_vocabulary, keywords)

    def row(self, source_field: str) -> MappingRow:
        for row in self.rows:
            if row.source_field == source_field:
                return row
        raise KeyError(source_field)

    def select(self, source_field: str, target: str) -> None:
        self.row(source_field).select(target)

    def save_preset(self, name: str) -> MappingPreset:
        return self.store.save(name, self.rows)

    def load_preset(self, name: str) -> MappingPreset:
        preset = self.store.load(name)
        apply_preset(preset, self.rows)
        return preset

    def available_presets(self) -> List[str]:
        return self.store.list_names()

    def final_mappings(self) -> Dict[str, str]:
        mappings = final_mappings(self.rows)
        if not mappings:
            logger.warning("No parameters are mapped; rooms will be created without parameter data")
        return mappings

    @property
    def has_mappings(self) -> bool:
        return any(not row.is_skipped for row in self.rows)


__all__ = ["MappingSession"]
