"""Named mapping presets, one JSON file per preset."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError

from tracker.exceptions import InvalidPresetNameError, PresetCorruptError, PresetNotFoundError
from tracker.logging_config import get_logger
from tracker.mapping.models import MappingPair, MappingPreset, MappingRow
from tracker.settings import Settings
from tracker.storage import DocumentStorage, LocalStorage

logger = get_logger("presets")

PRESET_SUFFIX = ".json"
_FORBIDDEN_NAME_CHARS = set('/\\:*?"<>|\0')


def default_preset_name(now: datetime | None = None) -> str:
    return f"FR_to_Room_{(now or datetime.now()):%Y%m%d}"


def validate_preset_name(name: str) -> str:
    if not name or not name.strip():
        raise InvalidPresetNameError("Preset name must not be empty", {"name": name})
    if name.strip() in {".", ".."} or _FORBIDDEN_NAME_CHARS.intersection(name):
        raise InvalidPresetNameError(
            f"Preset name '{name}' cannot be used as a file name",
            {"name": name},
        )
    return name


class PresetStore:
    def __init__(self, directory: Path, storage: DocumentStorage | None = None) -> None:
        self.directory = directory
        self.storage: DocumentStorage = storage if storage is not None else LocalStorage(directory)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PresetStore":
        return cls(settings.presets.resolved_directory)

    def _key(self, name: str) -> str:
        return f"{validate_preset_name(name)}{PRESET_SUFFIX}"

    def save(self, name: str, rows: Sequence[MappingRow | MappingPair]) -> MappingPreset:
        """Store the rows' current choices under ``name``, replacing any preset of that name.

        Raises:
            InvalidPresetNameError: If ``name`` is blank or not usable as a file name.
            StorageUnavailableError: If the preset directory cannot be written.
        """
        key = self._key(name)
        pairs = [
            row if isinstance(row, MappingPair) else MappingPair(source_field=row.source_field, target_field=row.target_field)
            for row in rows
        ]
        preset = MappingPreset(name=name, pairs=pairs)
        location = self.storage.put_bytes(key, preset.to_json().encode("utf-8"))
        logger.info("Saved mapping preset '{}' ({} mapping(s)) to {}", name, len(pairs), location)
        return preset

    def list_names(self) -> List[str]:
        return [key[: -len(PRESET_SUFFIX)] for key in self.storage.list_keys(PRESET_SUFFIX)]

    def load(self, name: str) -> MappingPreset:
        """Read the preset stored under ``name``.

        Raises:
            PresetNotFoundError: If no such preset exists.
            PresetCorruptError: If the file is not valid preset JSON or names
                a different preset than its file name.
            StorageUnavailableError: If the file cannot be read.
        """
        key = self._key(name)
        if not self.storage.exists(key):
            raise PresetNotFoundError(f"Mapping preset '{name}' not found", {"name": name})

        raw = self.storage.get_bytes(key)
        try:
            payload = json.loads(raw.decode("utf-8"))
            preset = MappingPreset.model_validate(payload)
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            raise PresetCorruptError(
                f"Invalid preset file for '{name}': {exc}",
                {"name": name},
            ) from exc
        if preset.name != name:
            raise PresetCorruptError(
                f"Preset file for '{name}' is named '{preset.name}' inside",
                {"name": name, "stored_name": preset.name},
            )
        logger.info("Loaded mapping preset '{}' ({} mapping(s))", preset.name, len(preset.pairs))
        return preset


def apply_preset(preset: MappingPreset, rows: List[MappingRow]) -> List[MappingRow]:
    """Copy the preset's choices onto matching rows.

    A pair is used only when its source row exists and still offers the stored
    target; everything else is left as it was. Returns ``rows`` itself.
    """
    by_source = {row.source_field: row for row in rows}
    applied = 0
    for pair in preset.pairs:
        row = by_source.get(pair.source_field)
        if row is None or not row.offers(pair.target_field):
            logger.warning(
                "Preset '{}': mapping {} -> {} not applicable, skipped",
                preset.name,
                pair.source_field,
                pair.target_field,
            )
            continue
        row.target_field = pair.target_field
        applied += 1
    logger.info("Applied {}/{} mapping(s) from preset '{}'", applied, len(preset.pairs), preset.name)
    return rows


__all__ = [
    "PRESET_SUFFIX",
    "PresetStore",
    "apply_preset",
    "default_preset_name",
    "validate_preset_name",
]
