from __future__ import annotations

from dataclasses import dataclass

import aiohttp

from lyrics_app.config import AppConfig
from lyrics_app.telemetry import EventLog
from lyrics_logic.application.translate import TranslationResolver, build_provider_fetcher
from lyrics_logic.cache import TranslationCache
from lyrics_logic.http import AsyncFetcher
from lyrics_logic.progress import ProgressTracker
from lyrics_logic.starter_dictionary import StarterDictionary
from lyrics_logic.storage.snapshot import FileSnapshotSlot, SnapshotSlot
from lyrics_logic.storage.store import LearningStore
from lyrics_logic.vocabulary import VocabularyAggregator


@dataclass(slots=True)
class AppServices:
    config: AppConfig
    store: LearningStore
    aggregator: VocabularyAggregator
    tracker: ProgressTracker
    translation_cache: TranslationCache
    events: EventLog
    fetcher: AsyncFetcher | None = None
    _resolver: TranslationResolver | None = None
    _session: aiohttp.ClientSession | None = None

    @classmethod
    def create(
        cls,
        config: AppConfig,
        *,
        slot: SnapshotSlot | None = None,
        fetcher: AsyncFetcher | None = None,
        events: EventLog | None = None,
    ) -> "AppServices":
        snapshot_slot = (
            slot if slot is not None else FileSnapshotSlot(config.storage.data_dir)
        )
        store = LearningStore(
            snapshot_slot,
            snapshot_key=config.storage.snapshot_key,
            seed_samples=config.storage.seed_samples,
        )
        aggregator = VocabularyAggregator(
            store=store,
            dictionary=StarterDictionary(),
            max_words=config.ingestion.max_words,
        )
        return cls(
            config=config,
            store=store,
            aggregator=aggregator,
            tracker=ProgressTracker(store=store),
            translation_cache=TranslationCache(
                capacity=config.translation.cache_capacity
            ),
            events=events if events is not None else EventLog.from_environment(),
            fetcher=fetcher,
        )

    async def resolver(self) -> TranslationResolver:
        if self._resolver is not None:
            return self._resolver
        fetcher = self.fetcher
        if fetcher is None:
            # The session has to be created inside the running event loop.
            self._session = aiohttp.ClientSession()
            fetcher = build_provider_fetcher(
                self._session, timeout=self.config.translation.timeout_s
            )
        self._resolver = TranslationResolver(
            fetcher=fetcher,
            cache=self.translation_cache,
            target_lang=self.config.translation.target_lang,
        )
        return self._resolver

    async def aclose(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
        self._resolver = None
        self.store.close()
        self.events.close()
