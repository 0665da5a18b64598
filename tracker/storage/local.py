from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from tracker.exceptions import StorageUnavailableError


class LocalStorage:
    """Flat directory of files addressed by key.

    The directory is created lazily on the first write so that listing an
    unused store never touches the filesystem.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def _path(self, key: str) -> Path:
        return self.root / key

    def put_bytes(self, key: str, data: bytes) -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_atomic(path, data)
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot write {path}: {exc}",
                {"path": str(path)},
            ) from exc
        return str(path)

    def get_bytes(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot read {path}: {exc}",
                {"path": str(path)},
            ) from exc

    def exists(self, key: str) -> bool:
        path = self._path(key)
        try:
            return stat.S_ISREG(path.stat().st_mode)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot access {path}: {exc}",
                {"path": str(path)},
            ) from exc

    def list_keys(self, suffix: str = "") -> list[str]:
        try:
            return sorted(
                entry.name
                for entry in self.root.iterdir()
                if entry.is_file() and entry.name.endswith(suffix)
            )
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot list {self.root}: {exc}",
                {"path": str(self.root)},
            ) from exc


def write_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a sibling temp file and rename.

    Either the old content or the complete new content is on disk afterwards;
    the temp file is removed when the write fails.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
            fp.flush()
            os.fsync(fp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


__all__ = ["LocalStorage", "write_atomic"]
