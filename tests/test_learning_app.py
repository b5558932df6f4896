from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from lyrics_app.app import LearningApp
from lyrics_app.config import (
    AppConfig,
    IngestionConfig,
    StorageConfig,
    TranslationConfig,
)
from lyrics_app.telemetry import EventLog
from lyrics_logic.errors import InvalidLineError, StoreWriteError, UnknownRecordError
from lyrics_logic.http import FetchError
from lyrics_logic.models import TranslationSource
from lyrics_logic.storage import MemorySnapshotSlot

_SPANISH_ENTRY = json.dumps(
    {
        "es": [
            {
                "partOfSpeech": "Verb",
                "definitions": [{"definition": "to dance"}],
            }
        ]
    }
)


def _config(tmp_path: Path, seed_samples: bool = False) -> AppConfig:
    return AppConfig(
        storage=StorageConfig(
            data_dir=tmp_path, snapshot_key="test", seed_samples=seed_samples
        ),
        translation=TranslationConfig(target_lang="en", cache_capacity=8, timeout_s=1.0),
        ingestion=IngestionConfig(max_words=50),
    )


class FakeFetcher:
    def __init__(self) -> None:
        self.urls: list[str] = []

    async def __call__(self, url: str) -> str:
        self.urls.append(url)
        if "wiktionary.org" in url and url.endswith("/baila"):
            return _SPANISH_ENTRY
        raise FetchError("offline")


class FailingSlot(MemorySnapshotSlot):
    def __init__(self) -> None:
        super().__init__()
        self.broken = False

    def save(self, key: str, data: bytes) -> None:
        if self.broken:
            raise OSError("read-only")
        super().save(key, data)


def _app(
    tmp_path: Path, slot: MemorySnapshotSlot | None = None
) -> tuple[LearningApp, FakeFetcher]:
    fetcher = FakeFetcher()
    app = LearningApp.create(
        _config(tmp_path),
        slot=slot if slot is not None else MemorySnapshotSlot(),
        fetcher=fetcher,
    )
    app.initialize()
    return app, fetcher


def test_add_song_ingests_vocabulary(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)
    spanish = app.language_by_code("es")
    assert spanish is not None

    outcome = app.add_song("Mi Amor", "Artista", spanish.id, "amor amor\nbaila")

    assert outcome.is_ok
    song_id = outcome.unwrap()
    assert [song.id for song in app.songs_for(spanish.id)] == [song_id]
    vocabulary = {entry.word: entry for entry in app.vocabulary_for(spanish.id)}
    assert vocabulary["amor"].frequency_count == 2
    assert vocabulary["amor"].translation == "love"
    assert vocabulary["baila"].translation == ""


def test_add_song_with_unknown_language_fails(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)

    outcome = app.add_song("Song", "Artist", 999, "lyrics here")

    assert not outcome.is_ok
    assert isinstance(outcome.error, UnknownRecordError)
    with pytest.raises(UnknownRecordError):
        outcome.unwrap()


def test_add_song_reports_storage_failure(tmp_path: Path) -> None:
    slot = FailingSlot()
    app, _ = _app(tmp_path, slot)
    korean = app.language_by_code("ko")
    assert korean is not None

    slot.broken = True
    outcome = app.add_song("Song", "Artist", korean.id, "사랑")

    assert isinstance(outcome.error, StoreWriteError)
    assert app.songs_for(korean.id) == []
    assert app.vocabulary_for(korean.id) == []

    slot.broken = False
    retried = app.add_song("Song", "Artist", korean.id, "사랑")

    assert [song.id for song in app.songs_for(korean.id)] == [retried.unwrap()]


def test_progress_round_trip(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)
    korean = app.language_by_code("ko")
    assert korean is not None
    song_id = app.add_song("Song", "Artist", korean.id, "하나\n둘\n셋").unwrap()

    recorded = app.record_progress(song_id, 1, False)
    completed = app.complete_line(song_id, 1)

    assert recorded.is_ok
    record = completed.unwrap()
    assert record.current_line == 2
    assert record.completed is True
    assert record.sessions == 2
    assert app.progress_for(song_id) == record


def test_progress_for_unknown_song_fails(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)

    assert isinstance(app.record_progress(7, 0, False).error, UnknownRecordError)
    assert isinstance(app.go_to_line(7, 0).error, UnknownRecordError)


def test_translate_and_backfill(tmp_path: Path) -> None:
    app, fetcher = _app(tmp_path)
    spanish = app.language_by_code("es")
    assert spanish is not None
    app.add_song("Baila", "Artista", spanish.id, "baila baila")

    async def run() -> None:
        try:
            result = await app.translate("baila", "es")
            assert result.text == "to dance"
            assert result.source is TranslationSource.DICTIONARY
            entry = app.vocabulary_for(spanish.id)[0]
            outcome = await app.backfill_translation(entry, "es")
            updated = outcome.unwrap()
            assert updated.translation == "to dance"
            assert updated.frequency_count == 2
        finally:
            await app.aclose()

    asyncio.run(run())

    assert len(fetcher.urls) == 1


def test_backfill_keeps_entry_when_nothing_translates(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)
    german = app.language_by_code("de")
    assert german is not None
    app.add_song("Lied", "Band", german.id, "wolke")
    entry = app.vocabulary_for(german.id)[0]

    async def run() -> None:
        try:
            outcome = await app.backfill_translation(entry, "de")
            assert outcome.unwrap() == entry
        finally:
            await app.aclose()

    asyncio.run(run())


def test_sample_songs_follow_config(tmp_path: Path) -> None:
    app = LearningApp.create(
        _config(tmp_path, seed_samples=True), slot=MemorySnapshotSlot()
    )
    app.initialize()

    korean = app.language_by_code("ko")
    assert korean is not None
    assert [song.title for song in app.songs_for(korean.id)] == ["Hello My Love"]
    asyncio.run(app.aclose())


def test_learning_sessions_are_recorded(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)
    korean = app.language_by_code("ko")
    assert korean is not None
    song_id = app.add_song("Song", "Artist", korean.id, "사랑 시간").unwrap()

    session = app.record_learning_session(song_id, ["사랑", " ", "시간"], 12).unwrap()
    missing = app.record_learning_session(404, ["사랑"])

    assert session.vocabulary_learned == ("사랑", "시간")
    assert session.duration_minutes == 12
    assert isinstance(missing.error, UnknownRecordError)


def test_out_of_range_lines_become_failed_outcomes(tmp_path: Path) -> None:
    app, _ = _app(tmp_path)
    korean = app.language_by_code("ko")
    assert korean is not None
    song_id = app.add_song("Song", "Artist", korean.id, "하나\n둘").unwrap()

    outcomes = [
        app.go_to_line(song_id, 5),
        app.complete_line(song_id, -1),
        app.record_progress(song_id, -3, False),
    ]

    assert all(isinstance(outcome.error, InvalidLineError) for outcome in outcomes)
    assert app.progress_for(song_id) is None


def test_events_are_written_for_app_activity(tmp_path: Path) -> None:
    events = EventLog(path=tmp_path / "logs" / "events.log")
    app = LearningApp.create(
        _config(tmp_path),
        slot=MemorySnapshotSlot(),
        fetcher=FakeFetcher(),
        events=events,
    )
    app.initialize()
    spanish = app.language_by_code("es")
    assert spanish is not None
    app.add_song("Mi Amor", "Artista", spanish.id, "amor")
    asyncio.run(app.aclose())

    lines = (tmp_path / "logs" / "events.log").read_text(encoding="utf-8").splitlines()
    names = [json.loads(line)["event"] for line in lines]
    assert names == ["store_ready", "song_added"]
    assert "amor" not in lines[1]
