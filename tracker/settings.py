from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from tracker.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class PresetSettings(BaseModel):
    directory: Path | None = None
    app_folder: str = "dataTracker"
    presets_folder: str = "MappingPresets"
    directory_env: str = "TRACKER_PRESET_DIR"

    @property
    def resolved_directory(self) -> Path:
        """Directory holding one JSON file per mapping preset.

        Precedence: the environment override, the configured directory, then
        the per-user application data folder.
        """
        override = os.getenv(self.directory_env)
        if override:
            return Path(override).expanduser()
        if self.directory is not None:
            return self.directory.expanduser()
        return _config_base() / self.app_folder / self.presets_folder


class MappingSettings(BaseModel):
    keywords: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: Any) -> dict[str, list[str]]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("keywords must map a keyword to a list of parameter names")
        normalized: dict[str, list[str]] = {}
        for keyword, names in value.items():
            if isinstance(names, str):
                names = [names]
            normalized[str(keyword).lower()] = [str(name) for name in names or []]
        return normalized


class ExportSettings(BaseModel):
    file_prefix: str = "RoomComparison"
    csv_encoding: str = "utf-8-sig"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    log_file: Path | None = None

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


class Settings(BaseModel):
    presets: PresetSettings = Field(default_factory=PresetSettings)
    mapping: MappingSettings = Field(default_factory=MappingSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                TRACKER_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid.
        """
        config_path = path or Path(os.getenv("TRACKER_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                payload = yaml.safe_load(fp) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Could not read configuration: {exc}",
                {"path": str(config_path)},
            ) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping",
                {"path": str(config_path)},
            )
        try:
            return cls(**payload)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc}",
                {"path": str(config_path)},
            ) from exc


def _config_base() -> Path:
    appdata = os.getenv("APPDATA")
    if appdata:
        return Path(appdata)
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "PresetSettings",
    "MappingSettings",
    "ExportSettings",
    "LoggingSettings",
    "get_settings",
]
