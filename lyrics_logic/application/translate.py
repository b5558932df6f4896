from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Final

import aiohttp

from lyrics_logic.cache import TranslationCache, TranslationCacheStats
from lyrics_logic.domain import rules
from lyrics_logic.http import DEFAULT_TIMEOUT_SECONDS, AsyncFetcher, build_async_fetcher
from lyrics_logic.models import Confidence, TranslationResult, TranslationSource
from lyrics_logic.providers.mymemory import StatisticalResult, translate_mymemory
from lyrics_logic.providers.wiktionary import DictionaryResult, lookup_wiktionary
from lyrics_logic.text import normalize_whitespace

DEFAULT_TARGET_LANG: Final[str] = "en"

_LOGGER = logging.getLogger(__name__)


def build_provider_fetcher(
    session: aiohttp.ClientSession,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> AsyncFetcher:
    return build_async_fetcher(session, timeout=timeout)


@dataclass(slots=True)
class TranslationResolver:
    fetcher: AsyncFetcher
    cache: TranslationCache = field(default_factory=TranslationCache)
    target_lang: str = DEFAULT_TARGET_LANG

    async def resolve(self, text: str, source_lang: str) -> TranslationResult:
        word = normalize_whitespace(text)
        if not word:
            return TranslationResult.untranslated(word)
        key = rules.cache_key(word, source_lang)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        result = await self._resolve_uncached(word, key[1])
        self.cache.set(key, result)
        return result

    async def _resolve_uncached(self, word: str, source_lang: str) -> TranslationResult:
        if not rules.is_line(word):
            dictionary = await self._dictionary_stage(word, source_lang)
            if dictionary.found:
                _LOGGER.debug("Resolved %r from dictionary", word)
                return TranslationResult(
                    word=word,
                    text=dictionary.gloss,
                    confidence=Confidence.DICTIONARY.value,
                    source=TranslationSource.DICTIONARY,
                    part_of_speech=dictionary.part_of_speech,
                    example=dictionary.example,
                )
        statistical = await self._statistical_stage(word, source_lang)
        if statistical.found:
            _LOGGER.debug("Resolved %r from statistical provider", word)
            return TranslationResult(
                word=word,
                text=statistical.translation,
                confidence=Confidence.STATISTICAL.value,
                source=TranslationSource.STATISTICAL,
            )
        _LOGGER.info("No provider could translate %r (%s)", word, source_lang)
        return TranslationResult.untranslated(word)

    async def _dictionary_stage(self, word: str, source_lang: str) -> DictionaryResult:
        try:
            return await lookup_wiktionary(word, source_lang, self.fetcher)
        except Exception as exc:
            _LOGGER.warning("Dictionary lookup for %r failed: %r", word, exc)
            return DictionaryResult.not_found()

    async def _statistical_stage(self, word: str, source_lang: str) -> StatisticalResult:
        try:
            return await translate_mymemory(
                word, source_lang, self.target_lang, self.fetcher
            )
        except Exception as exc:
            _LOGGER.warning("Statistical translation for %r failed: %r", word, exc)
            return StatisticalResult.not_found()

    def cache_size(self) -> int:
        return len(self.cache)

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> TranslationCacheStats:
        return self.cache.snapshot()
