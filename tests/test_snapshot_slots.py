from __future__ import annotations

from pathlib import Path

from lyrics_logic.storage import FileSnapshotSlot, MemorySnapshotSlot


def test_file_slot_round_trips_bytes(tmp_path: Path) -> None:
    slot = FileSnapshotSlot(tmp_path / "data")

    assert slot.load("languageSongsDB") is None
    slot.save("languageSongsDB", b"first")
    slot.save("languageSongsDB", b"second")

    assert slot.load("languageSongsDB") == b"second"
    assert slot.path_for("languageSongsDB").name == "languageSongsDB.sqlite3"


def test_file_slot_leaves_no_temporary_files(tmp_path: Path) -> None:
    slot = FileSnapshotSlot(tmp_path)

    slot.save("db", b"payload")

    assert [path.name for path in tmp_path.iterdir()] == ["db.sqlite3"]


def test_memory_slot_keeps_keys_apart() -> None:
    slot = MemorySnapshotSlot()

    slot.save("a", b"1")
    slot.save("b", b"2")

    assert slot.load("a") == b"1"
    assert slot.load("b") == b"2"
    assert slot.load("c") is None
