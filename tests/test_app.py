"""Tests for process start-up."""

from pathlib import Path
from typing import Iterator

import pytest
from loguru import logger

from tracker.app import bootstrap, open_comparison, open_mapping
from tracker.exceptions import ConfigurationError
from tracker.settings import get_settings


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    monkeypatch.delenv("TRACKER_PRESET_DIR", raising=False)
    path = tmp_path / "tracker.yaml"
    path.write_text(
        "presets:\n"
        f"  directory: {tmp_path / 'presets'}\n"
        "mapping:\n"
        "  keywords:\n"
        "    finish: [Floor Finish]\n"
        "export:\n"
        "  file_prefix: DoorComparison\n"
        "logging:\n"
        "  level: warning\n"
        f"  log_file: {tmp_path / 'logs' / 'tracker.log'}\n",
        encoding="utf-8",
    )
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()
    logger.remove()


def test_bootstrap_configures_logging(config_file: Path, tmp_path: Path):
    """Test start-up installs the log file sink at the configured level."""
    settings = bootstrap(config_file)
    logger.info("dropped")
    logger.warning("kept")

    assert settings.logging.level == "WARNING"
    content = (tmp_path / "logs" / "tracker.log").read_text(encoding="utf-8")
    assert "kept" in content
    assert "dropped" not in content


def test_bootstrap_missing_config(tmp_path: Path):
    """Test a missing settings file raises ConfigurationError."""
    get_settings.cache_clear()
    try:
        with pytest.raises(ConfigurationError):
            bootstrap(tmp_path / "absent.yaml")
    finally:
        get_settings.cache_clear()


def test_sessions_follow_settings(config_file: Path, tmp_path: Path):
    """Test sessions opened after start-up use the loaded settings."""
    settings = bootstrap(config_file)

    mapping = open_mapping(["FR_Finish_Code"], ["Floor Finish"], settings)
    assert mapping.store.directory == tmp_path / "presets"
    assert mapping.rows[0].target_field == "Floor Finish"

    comparison = open_comparison([], "v2", settings, entity_label="Door")
    assert comparison.export_csv(tmp_path).name.startswith("DoorComparison_v2_")
