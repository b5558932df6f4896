from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Final

from lyrics_logic.models import Language, Song, VocabularyUpdate
from lyrics_logic.starter_dictionary import StarterDictionary
from lyrics_logic.storage.store import LearningStore
from lyrics_logic.text import extract_words, word_frequency

DEFAULT_MAX_WORDS: Final[int] = 50

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VocabularyBatch:
    updates: tuple[VocabularyUpdate, ...]
    skipped_words: int

    @property
    def words(self) -> tuple[str, ...]:
        return tuple(update.word for update in self.updates)

    @property
    def starter_translations(self) -> int:
        return sum(1 for update in self.updates if update.translation)


@dataclass(frozen=True, slots=True)
class IngestReport:
    song_id: int
    recorded_words: tuple[str, ...]
    skipped_words: int
    starter_translations: int


@dataclass(slots=True)
class VocabularyAggregator:
    store: LearningStore
    dictionary: StarterDictionary = field(default_factory=StarterDictionary)
    max_words: int = DEFAULT_MAX_WORDS

    def collect(self, lyrics: str, language: Language) -> VocabularyBatch:
        counts = word_frequency(extract_words(lyrics))
        # Counter preserves insertion order, so this is the tokenizer order.
        distinct = list(counts)
        kept = distinct[: self.max_words]
        updates = tuple(
            VocabularyUpdate(
                word=word,
                translation=self.dictionary.lookup(word, language.code),
                occurrences=counts[word],
            )
            for word in kept
        )
        return VocabularyBatch(updates=updates, skipped_words=len(distinct) - len(kept))

    def add_song(
        self, title: str, artist: str, language: Language, lyrics: str
    ) -> tuple[Song, IngestReport]:
        batch = self.collect(lyrics, language)
        song = self.store.add_song(title, artist, language.id, lyrics, batch.updates)
        return song, self._report(song.id, batch)

    def ingest(self, lyrics: str, language: Language, song_id: int) -> IngestReport:
        batch = self.collect(lyrics, language)
        self.store.upsert_vocabulary_batch(language.id, batch.updates, song_id)
        return self._report(song_id, batch)

    def _report(self, song_id: int, batch: VocabularyBatch) -> IngestReport:
        if batch.skipped_words:
            logger.info(
                "Ingestion cap reached for song %d: %d words not recorded",
                song_id,
                batch.skipped_words,
            )
        return IngestReport(
            song_id=song_id,
            recorded_words=batch.words,
            skipped_words=batch.skipped_words,
            starter_translations=batch.starter_translations,
        )
