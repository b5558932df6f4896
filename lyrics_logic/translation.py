from __future__ import annotations

import html
import re
from typing import Final

from lyrics_logic.models import TranslationLimit
from lyrics_logic.text import normalize_whitespace

_WIKI_LINK_RE: Final[re.Pattern[str]] = re.compile(r"\[\[(?:[^\]|]+\|)?([^\]]+)\]\]")
_TEMPLATE_RE: Final[re.Pattern[str]] = re.compile(r"\{\{[^}]*\}\}")
_PARENTHETICAL_RE: Final[re.Pattern[str]] = re.compile(r"\([^)]*\)")
_TAG_RE: Final[re.Pattern[str]] = re.compile(r"<[^>]+>")
_BRACKETS_RE: Final[re.Pattern[str]] = re.compile(r"[\[\]{}]")
_SENTENCE_END_RE: Final[re.Pattern[str]] = re.compile(r"[.;]")


def strip_markup(value: str) -> str:
    without_tags = _TAG_RE.sub("", value)
    return normalize_whitespace(html.unescape(without_tags))


def clean_definition(definition: str) -> str:
    text = strip_markup(definition)
    text = _WIKI_LINK_RE.sub(r"\1", text)
    text = _TEMPLATE_RE.sub("", text)
    text = _PARENTHETICAL_RE.sub("", text)
    first_sentence = _SENTENCE_END_RE.split(text, maxsplit=1)[0]
    return _truncate(first_sentence, TranslationLimit.GLOSS_CHARS.value)


def clean_translation(translation: str) -> str:
    text = _BRACKETS_RE.sub("", strip_markup(translation))
    first_meaning = text.split(",", 1)[0]
    return _truncate(first_meaning, TranslationLimit.STATISTICAL_CHARS.value)


def is_degenerate_translation(source_text: str, translated: str) -> bool:
    normalized = normalize_whitespace(translated)
    if not normalized:
        return True
    if normalized.casefold() == normalize_whitespace(source_text).casefold():
        return True
    return "[" in normalized


def _truncate(value: str, limit: int) -> str:
    return normalize_whitespace(value)[:limit].strip()
