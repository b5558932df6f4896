from __future__ import annotations

import pytest

from lyrics_logic.errors import InvalidLineError, UnknownRecordError
from lyrics_logic.progress import ProgressTracker
from lyrics_logic.storage import LearningStore, MemorySnapshotSlot


def _tracker_with_song(lyrics: str) -> tuple[ProgressTracker, int]:
    store = LearningStore(MemorySnapshotSlot())
    store.initialize()
    language = store.language_by_code("ko")
    assert language is not None
    song = store.add_song("Song", "Artist", language.id, lyrics)
    return ProgressTracker(store=store), song.id


def test_record_keeps_one_progress_row_per_song() -> None:
    tracker, song_id = _tracker_with_song("a\nb\nc\nd\ne")

    tracker.record(song_id, 2, False)
    record = tracker.record(song_id, 4, True)

    stored = tracker.progress_for(song_id)
    assert stored == record
    assert record.current_line == 4
    assert record.completed is True
    assert record.sessions == 2


def test_progress_for_unknown_song_is_none() -> None:
    tracker, _ = _tracker_with_song("a\nb")

    assert tracker.progress_for(999) is None


def test_last_line_index_ignores_blank_lines() -> None:
    tracker, song_id = _tracker_with_song("first\n\nsecond\n\n")

    assert tracker.last_line_index(song_id) == 1


def test_go_to_last_line_marks_song_completed() -> None:
    tracker, song_id = _tracker_with_song("a\nb\nc")

    middle = tracker.go_to_line(song_id, 1)
    last = tracker.go_to_line(song_id, 2)

    assert middle.completed is False
    assert last.current_line == 2
    assert last.completed is True


def test_complete_line_advances_until_the_end() -> None:
    tracker, song_id = _tracker_with_song("a\nb\nc")

    first = tracker.complete_line(song_id, 0)
    second = tracker.complete_line(song_id, 1)
    third = tracker.complete_line(song_id, 2)

    assert (first.current_line, first.completed) == (1, False)
    assert (second.current_line, second.completed) == (2, True)
    assert (third.current_line, third.completed) == (2, True)
    assert third.sessions == 3


def test_lines_outside_the_song_are_rejected() -> None:
    tracker, song_id = _tracker_with_song("a\nb")

    with pytest.raises(InvalidLineError):
        tracker.go_to_line(song_id, 2)
    with pytest.raises(InvalidLineError):
        tracker.complete_line(song_id, -1)
    assert tracker.progress_for(song_id) is None


def test_navigation_on_unknown_song_raises() -> None:
    tracker, _ = _tracker_with_song("a")

    with pytest.raises(UnknownRecordError):
        tracker.go_to_line(42, 0)
