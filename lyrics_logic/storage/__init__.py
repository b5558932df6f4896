from __future__ import annotations

from lyrics_logic.storage.schema import SUPPORTED_LANGUAGES as SUPPORTED_LANGUAGES
from lyrics_logic.storage.snapshot import DEFAULT_SNAPSHOT_KEY as DEFAULT_SNAPSHOT_KEY
from lyrics_logic.storage.snapshot import FileSnapshotSlot as FileSnapshotSlot
from lyrics_logic.storage.snapshot import MemorySnapshotSlot as MemorySnapshotSlot
from lyrics_logic.storage.snapshot import SnapshotSlot as SnapshotSlot
from lyrics_logic.storage.store import LearningStore as LearningStore

__all__ = [
    "DEFAULT_SNAPSHOT_KEY",
    "FileSnapshotSlot",
    "LearningStore",
    "MemorySnapshotSlot",
    "SUPPORTED_LANGUAGES",
    "SnapshotSlot",
]
