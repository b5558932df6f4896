from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import tempfile
from typing import Final, Protocol

DEFAULT_SNAPSHOT_KEY: Final[str] = "languageSongsDB"
SNAPSHOT_SUFFIX: Final[str] = ".sqlite3"


class SnapshotSlot(Protocol):
    def load(self, key: str) -> bytes | None: ...

    def save(self, key: str, data: bytes) -> None: ...


def _default_blobs() -> dict[str, bytes]:
    return {}


@dataclass(slots=True)
class MemorySnapshotSlot:
    _blobs: dict[str, bytes] = field(default_factory=_default_blobs)

    def load(self, key: str) -> bytes | None:
        return self._blobs.get(key)

    def save(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)


@dataclass(frozen=True, slots=True)
class FileSnapshotSlot:
    directory: Path

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}{SNAPSHOT_SUFFIX}"

    def load(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def save(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{key}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
