from __future__ import annotations

from lyrics_logic.application.translate import (
    TranslationResolver as TranslationResolver,
)
from lyrics_logic.application.translate import (
    build_provider_fetcher as build_provider_fetcher,
)

__all__ = ["TranslationResolver", "build_provider_fetcher"]
