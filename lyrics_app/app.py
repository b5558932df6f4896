from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import hashlib
import logging

from lyrics_app.config import AppConfig, load_config
from lyrics_app.services.container import AppServices
from lyrics_app.telemetry import Event, EventLog
from lyrics_logic.errors import (
    InvalidLineError,
    StoreInitializationError,
    StoreWriteError,
    UnknownRecordError,
)
from lyrics_logic.http import AsyncFetcher
from lyrics_logic.models import (
    Language,
    LearningSession,
    Outcome,
    ProgressRecord,
    Song,
    TranslationResult,
    VocabularyEntry,
)
from lyrics_logic.storage.snapshot import SnapshotSlot

logger = logging.getLogger(__name__)


def text_fields(value: str) -> dict[str, object]:
    # Lyrics and lookups stay out of the event log; only length and digest are kept.
    if not value:
        return {"text_len": 0, "text_hash": ""}
    digest = hashlib.sha256(value.encode("utf-8", errors="ignore")).hexdigest()
    return {"text_len": len(value), "text_hash": digest}


@dataclass(slots=True)
class LearningApp:
    services: AppServices

    @classmethod
    def create(
        cls,
        config: AppConfig | None = None,
        *,
        slot: SnapshotSlot | None = None,
        fetcher: AsyncFetcher | None = None,
        events: EventLog | None = None,
    ) -> "LearningApp":
        effective = config if config is not None else load_config()
        return cls(
            AppServices.create(effective, slot=slot, fetcher=fetcher, events=events)
        )

    @property
    def events(self) -> EventLog:
        return self.services.events

    def initialize(self) -> None:
        try:
            self.services.store.initialize()
        except StoreInitializationError as exc:
            self.events.record_failure(Event.STORE_INIT_FAILED, exc)
            raise
        self.events.record(Event.STORE_READY, languages=len(self.list_languages()))

    def list_languages(self) -> list[Language]:
        return self.services.store.list_languages()

    def language_by_code(self, code: str) -> Language | None:
        return self.services.store.language_by_code(code)

    def add_song(
        self, title: str, artist: str, language_id: int, lyrics: str
    ) -> Outcome[int]:
        language = self.services.store.language(language_id)
        if language is None:
            return Outcome.failure(UnknownRecordError("language", language_id))
        try:
            song, report = self.services.aggregator.add_song(
                title, artist, language, lyrics
            )
        except (StoreWriteError, UnknownRecordError) as exc:
            self.events.record_failure(
                Event.SONG_ADD_FAILED, exc, language=language.code
            )
            return Outcome.failure(exc)
        self.events.record(
            Event.SONG_ADDED,
            song_id=song.id,
            language=language.code,
            words=len(report.recorded_words),
            skipped_words=report.skipped_words,
            **text_fields(lyrics),
        )
        return Outcome.success(song.id)

    def songs_for(self, language_id: int) -> list[Song]:
        return self.services.store.songs_by_language(language_id)

    def song(self, song_id: int) -> Song | None:
        return self.services.store.song(song_id)

    def vocabulary_for(self, language_id: int) -> list[VocabularyEntry]:
        return self.services.store.vocabulary_by_language(language_id)

    def record_progress(
        self, song_id: int, line: int, completed: bool
    ) -> Outcome[ProgressRecord]:
        tracker = self.services.tracker
        return self._progress(
            song_id, line, lambda: tracker.record(song_id, line, completed)
        )

    def go_to_line(self, song_id: int, line: int) -> Outcome[ProgressRecord]:
        tracker = self.services.tracker
        return self._progress(song_id, line, lambda: tracker.go_to_line(song_id, line))

    def complete_line(self, song_id: int, current_line: int) -> Outcome[ProgressRecord]:
        tracker = self.services.tracker
        return self._progress(
            song_id, current_line, lambda: tracker.complete_line(song_id, current_line)
        )

    def progress_for(self, song_id: int) -> ProgressRecord | None:
        return self.services.tracker.progress_for(song_id)

    def record_learning_session(
        self, song_id: int, vocabulary_learned: list[str], duration_minutes: int = 0
    ) -> Outcome[LearningSession]:
        try:
            session = self.services.store.record_learning_session(
                song_id, vocabulary_learned, duration_minutes
            )
        except (StoreWriteError, UnknownRecordError) as exc:
            self.events.record_failure(Event.SESSION_FAILED, exc, song_id=song_id)
            return Outcome.failure(exc)
        self.events.record(
            Event.SESSION_RECORDED,
            song_id=song_id,
            words=len(session.vocabulary_learned),
            minutes=session.duration_minutes,
        )
        return Outcome.success(session)

    async def translate(self, word: str, source_code: str) -> TranslationResult:
        resolver = await self.services.resolver()
        result = await resolver.resolve(word, source_code)
        self.events.record(
            Event.TRANSLATION_RESOLVED,
            language=source_code,
            source=result.source.value,
            confidence=result.confidence,
            **text_fields(word),
        )
        return result

    async def backfill_translation(
        self, entry: VocabularyEntry, source_code: str
    ) -> Outcome[VocabularyEntry]:
        if entry.translation:
            return Outcome.success(entry)
        result = await self.translate(entry.word, source_code)
        if not result.is_translated:
            return Outcome.success(entry)
        try:
            updated = self.services.store.backfill_translation(entry.id, result.text)
        except (StoreWriteError, UnknownRecordError) as exc:
            self.events.record_failure(
                Event.BACKFILL_FAILED, exc, entry_id=entry.id, language=source_code
            )
            return Outcome.failure(exc)
        return Outcome.success(updated)

    async def aclose(self) -> None:
        await self.services.aclose()
        logger.debug("Learning app closed")

    def _progress(
        self, song_id: int, line: int, command: Callable[[], ProgressRecord]
    ) -> Outcome[ProgressRecord]:
        try:
            record = command()
        except (StoreWriteError, UnknownRecordError, InvalidLineError) as exc:
            self.events.record_failure(
                Event.PROGRESS_FAILED, exc, song_id=song_id, line=line
            )
            return Outcome.failure(exc)
        self.events.record(
            Event.PROGRESS_RECORDED,
            song_id=song_id,
            line=record.current_line,
            completed=record.completed,
            sessions=record.sessions,
        )
        return Outcome.success(record)
