from __future__ import annotations

from lyrics_logic.providers.mymemory import StatisticalResult as StatisticalResult
from lyrics_logic.providers.mymemory import translate_mymemory as translate_mymemory
from lyrics_logic.providers.wiktionary import DictionaryResult as DictionaryResult
from lyrics_logic.providers.wiktionary import lookup_wiktionary as lookup_wiktionary

__all__ = [
    "DictionaryResult",
    "StatisticalResult",
    "lookup_wiktionary",
    "translate_mymemory",
]
