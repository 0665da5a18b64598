"""Custom exception hierarchy for the tracker application."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for all tracker-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(TrackerError):
    """Raised when configuration is invalid or missing."""
    pass


class ChangeRecordError(TrackerError):
    """Raised when a comparison record violates the category/changes contract."""
    pass


class MappingError(TrackerError):
    """Raised when a mapping row is edited with a value it does not offer."""
    pass


class PresetError(TrackerError):
    """Base class for mapping preset errors."""
    pass


class PresetNotFoundError(PresetError):
    """Raised when a preset with the requested name does not exist."""
    pass


class PresetCorruptError(PresetError):
    """Raised when a stored preset cannot be parsed or lacks its mappings."""
    pass


class InvalidPresetNameError(PresetError):
    """Raised when a preset name cannot be used as a storage key."""
    pass


class StorageError(TrackerError):
    """Raised when storage operations fail."""
    pass


class StorageUnavailableError(StorageError):
    """Raised when the storage location cannot be read or written."""
    pass


class ExportError(TrackerError):
    """Raised when writing comparison results to a file fails."""
    pass
