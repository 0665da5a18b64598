"""Storage abstraction for small keyed documents (presets) on the local filesystem."""

from __future__ import annotations

from typing import Protocol

from tracker.storage.local import LocalStorage


class DocumentStorage(Protocol):
    def put_bytes(self, key: str, data: bytes) -> str:  # returns path
        ...

    def get_bytes(self, key: str) -> bytes:
        ...

    def exists(self, key: str) -> bool:
        ...

    def list_keys(self, suffix: str = "") -> list[str]:
        ...


__all__ = ["DocumentStorage", "LocalStorage"]
