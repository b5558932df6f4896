from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Final, TypeGuard
from urllib.parse import quote

from lyrics_logic.http import AsyncFetcher, FetchError
from lyrics_logic.translation import clean_definition, strip_markup

WIKTIONARY_DEFINITION_URL = "https://en.wiktionary.org/api/rest_v1/page/definition/"

WIKTIONARY_LANGUAGE_NAMES: Final[dict[str, str]] = {
    "ko": "Korean",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "ja": "Japanese",
    "it": "Italian",
    "pt": "Portuguese",
    "zh": "Chinese",
    "hi": "Hindi",
    "ar": "Arabic",
    "ha": "Hausa",
    "sw": "Swahili",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DictionaryResult:
    found: bool
    gloss: str
    part_of_speech: str | None
    example: str | None

    @classmethod
    def not_found(cls) -> "DictionaryResult":
        return cls(found=False, gloss="", part_of_speech=None, example=None)


def build_wiktionary_url(word: str) -> str:
    return f"{WIKTIONARY_DEFINITION_URL}{quote(word, safe='')}"


async def lookup_wiktionary(
    word: str, source_lang: str, fetcher: AsyncFetcher
) -> DictionaryResult:
    if not word:
        return DictionaryResult.not_found()
    url = build_wiktionary_url(word)
    try:
        payload = await fetcher(url)
    except FetchError as exc:
        logger.debug("Wiktionary fetch failed: %s", exc)
        return DictionaryResult.not_found()
    try:
        return parse_wiktionary_payload(payload, source_lang)
    except (ValueError, TypeError) as exc:
        logger.debug("Wiktionary parse failed: %s", exc)
        return DictionaryResult.not_found()


def parse_wiktionary_payload(payload: str, source_lang: str) -> DictionaryResult:
    raw_data: object = json.loads(payload)
    if not _is_str_dict(raw_data):
        return DictionaryResult.not_found()
    for usage in _usages_for_language(raw_data, source_lang):
        part_of_speech = _get_str(usage.get("partOfSpeech"))
        for definition in _coerce_dict_list(usage.get("definitions")):
            raw_gloss = _get_str(definition.get("definition"))
            if raw_gloss is None:
                continue
            gloss = clean_definition(raw_gloss)
            if not gloss:
                continue
            return DictionaryResult(
                found=True,
                gloss=gloss,
                part_of_speech=part_of_speech,
                example=_first_example(definition),
            )
    return DictionaryResult.not_found()


def _usages_for_language(
    data: dict[str, object], source_lang: str
) -> list[dict[str, object]]:
    usages = _coerce_dict_list(data.get(source_lang))
    if usages:
        return usages
    language_name = WIKTIONARY_LANGUAGE_NAMES.get(source_lang)
    if language_name is None:
        return []
    matched: list[dict[str, object]] = []
    for value in data.values():
        for usage in _coerce_dict_list(value):
            if _get_str(usage.get("language")) == language_name:
                matched.append(usage)
    return matched


def _first_example(definition: dict[str, object]) -> str | None:
    examples = definition.get("examples")
    if _is_object_list(examples):
        for item in examples:
            text = _get_str(item)
            if text is not None:
                cleaned = strip_markup(text)
                if cleaned:
                    return cleaned
    for parsed in _coerce_dict_list(definition.get("parsedExamples")):
        text = _get_str(parsed.get("example"))
        if text is not None:
            cleaned = strip_markup(text)
            if cleaned:
                return cleaned
    return None


def _coerce_dict_list(value: object) -> list[dict[str, object]]:
    if not _is_object_list(value):
        return []
    return [dict(item) for item in value if _is_str_dict(item)]


def _get_str(value: object) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _is_str_dict(value: object) -> TypeGuard[dict[str, object]]:
    return isinstance(value, dict)


def _is_object_list(value: object) -> TypeGuard[list[object]]:
    return isinstance(value, list)
