from __future__ import annotations

from typing import Final

from lyrics_logic.domain.models import TranslationLimit

MIN_WORD_CHARS: Final[int] = 2

STOP_WORDS: Final[frozenset[str]] = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
        "by", "a", "an", "is", "was", "are", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "must", "i", "you", "he", "she", "it", "we",
        "they", "me", "him", "her", "us", "them", "my", "your", "his", "its",
        "our", "their", "mine", "yours", "ours", "this", "that", "these",
        "those", "here", "there", "where", "when", "why", "how", "all", "any",
        "both", "each", "few", "more", "most", "other", "some", "such", "no",
        "nor", "not", "only", "own", "same", "so", "than", "too", "very", "can",
    }
)  # fmt: skip


def normalize_whitespace(value: str) -> str:
    return " ".join(value.split())


def keep_letters(value: str) -> str:
    return "".join(char for char in value if char.isalpha() or char.isspace())


def is_stop_word(word: str) -> bool:
    return word.lower() in STOP_WORDS


def is_vocabulary_token(token: str) -> bool:
    return len(token) >= MIN_WORD_CHARS and not is_stop_word(token)


def is_line(text: str) -> bool:
    stripped = text.strip()
    has_space = any(char.isspace() for char in stripped)
    return has_space and len(stripped) > TranslationLimit.LINE_MIN_CHARS.value


def cache_key(text: str, source_lang: str) -> tuple[str, str]:
    return text.strip().lower(), source_lang.strip().lower()
