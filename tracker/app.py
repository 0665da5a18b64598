"""Process start-up for a host embedding the tracker.

Call ``bootstrap`` once before opening sessions: it loads the settings file
and installs the configured log sinks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from tracker.compare.models import ChangeRecord
from tracker.compare.session import ComparisonSession
from tracker.logging_config import get_logger, setup_logging_from_settings
from tracker.mapping.keywords import keyword_table_from_settings
from tracker.mapping.presets import PresetStore
from tracker.mapping.session import MappingSession
from tracker.settings import Settings, get_settings

logger = get_logger("app")


def bootstrap(config_path: Path | None = None) -> Settings:
    """Load settings and configure logging from their ``logging`` section.

    Raises:
        ConfigurationError: If the settings file is missing or invalid.
    """
    settings = get_settings(str(config_path) if config_path else None)
    setup_logging_from_settings(settings.logging)
    logger.info(
        "Tracker initialised: presets in {}, {} extra suggestion keyword(s)",
        settings.presets.resolved_directory,
        len(settings.mapping.keywords),
    )
    return settings


def open_comparison(
    records: Sequence[ChangeRecord | dict[str, Any]],
    version_name: str,
    settings: Settings,
    *,
    entity_label: str = "Room",
) -> ComparisonSession:
    return ComparisonSession(
        records,
        version_name,
        entity_label=entity_label,
        export_settings=settings.export,
    )


def open_mapping(
    source_fields: Sequence[str],
    target_vocabulary: Sequence[str],
    settings: Settings,
) -> MappingSession:
    return MappingSession(
        source_fields,
        target_vocabulary,
        PresetStore.from_settings(settings),
        keywords=keyword_table_from_settings(settings.mapping.keywords),
    )


__all__ = ["bootstrap", "open_comparison", "open_mapping"]
