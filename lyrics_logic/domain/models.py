from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from lyrics_logic.errors import LearningDataError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Language:
    id: int
    name: str
    code: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Song:
    id: int
    title: str
    artist: str
    language_id: int
    lyrics: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class VocabularyEntry:
    id: int
    word: str
    translation: str
    language_id: int
    frequency_count: int
    first_song_id: int | None
    created_at: datetime


@dataclass(frozen=True, slots=True)
class VocabularyUpdate:
    word: str
    translation: str
    occurrences: int = 1


@dataclass(frozen=True, slots=True)
class ProgressRecord:
    id: int
    song_id: int
    current_line: int
    completed: bool
    sessions: int
    last_accessed: datetime


@dataclass(frozen=True, slots=True)
class LearningSession:
    id: int
    song_id: int
    vocabulary_learned: tuple[str, ...]
    session_date: datetime
    duration_minutes: int


class TranslationSource(Enum):
    DICTIONARY = "dictionary"
    STATISTICAL = "statistical"
    UNTRANSLATED = "untranslated"


class Confidence(Enum):
    DICTIONARY = 0.8
    STATISTICAL = 0.6
    UNTRANSLATED = 0.1


class TranslationLimit(Enum):
    GLOSS_CHARS = 100
    STATISTICAL_CHARS = 50
    LINE_MIN_CHARS = 10


@dataclass(frozen=True, slots=True)
class TranslationResult:
    word: str
    text: str
    confidence: float
    source: TranslationSource
    # Neither Wiktionary definitions nor MyMemory report one, so this stays None.
    pronunciation: str | None = None
    part_of_speech: str | None = None
    example: str | None = None

    @classmethod
    def untranslated(cls, word: str) -> "TranslationResult":
        return cls(
            word=word,
            text=f"[{word}]",
            confidence=Confidence.UNTRANSLATED.value,
            source=TranslationSource.UNTRANSLATED,
        )

    @property
    def is_translated(self) -> bool:
        return self.source is not TranslationSource.UNTRANSLATED


class OutcomeStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    value: T | None
    error: LearningDataError | None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: LearningDataError) -> "Outcome[T]":
        return cls(value=None, error=error)

    @property
    def status(self) -> OutcomeStatus:
        if self.error is None:
            return OutcomeStatus.SUCCESS
        return OutcomeStatus.FAILURE

    @property
    def is_ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        if self.value is None:
            raise ValueError("Successful outcome carries no value")
        return self.value
