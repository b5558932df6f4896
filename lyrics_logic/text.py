from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from lyrics_logic.domain import rules


def extract_words(text: str) -> list[str]:
    if not text:
        return []
    letters_only = rules.keep_letters(text.lower())
    return [token for token in letters_only.split() if rules.is_vocabulary_token(token)]


def unique_words(text: str) -> list[str]:
    # dict.fromkeys keeps first-occurrence order, which the ingestion cap relies on.
    return list(dict.fromkeys(extract_words(text)))


def word_frequency(words: Iterable[str]) -> dict[str, int]:
    return dict(Counter(words))


def song_lines(lyrics: str) -> list[str]:
    return [line for line in lyrics.splitlines() if line.strip()]


def normalize_whitespace(value: str) -> str:
    return rules.normalize_whitespace(value)
