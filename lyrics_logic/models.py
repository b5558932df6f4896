from __future__ import annotations

from lyrics_logic.domain.models import (
    Confidence,
    Language,
    LearningSession,
    Outcome,
    OutcomeStatus,
    ProgressRecord,
    Song,
    TranslationLimit,
    TranslationResult,
    TranslationSource,
    VocabularyEntry,
    VocabularyUpdate,
)

__all__ = [
    "Confidence",
    "Language",
    "LearningSession",
    "Outcome",
    "OutcomeStatus",
    "ProgressRecord",
    "Song",
    "TranslationLimit",
    "TranslationResult",
    "TranslationSource",
    "VocabularyEntry",
    "VocabularyUpdate",
]
