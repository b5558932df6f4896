from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Final, TypeGuard
from urllib.parse import quote

from lyrics_logic.http import AsyncFetcher, FetchError
from lyrics_logic.translation import clean_translation, is_degenerate_translation

MYMEMORY_BASE_URL = "https://api.mymemory.translated.net/get"

MYMEMORY_LOCALES: Final[dict[str, str]] = {
    "ko": "ko-KR",
    "es": "es-ES",
    "fr": "fr-FR",
    "de": "de-DE",
    "ja": "ja-JP",
    "it": "it-IT",
    "pt": "pt-PT",
    "zh": "zh-CN",
    "en": "en-US",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StatisticalResult:
    found: bool
    translation: str

    @classmethod
    def not_found(cls) -> "StatisticalResult":
        return cls(found=False, translation="")


def mymemory_locale(code: str) -> str:
    return MYMEMORY_LOCALES.get(code, code)


def build_mymemory_url(text: str, source_lang: str, target_lang: str) -> str:
    langpair = f"{mymemory_locale(source_lang)}|{mymemory_locale(target_lang)}"
    return f"{MYMEMORY_BASE_URL}?q={quote(text)}&langpair={quote(langpair, safe='-')}"


async def translate_mymemory(
    text: str, source_lang: str, target_lang: str, fetcher: AsyncFetcher
) -> StatisticalResult:
    if not text.strip():
        return StatisticalResult.not_found()
    url = build_mymemory_url(text, source_lang, target_lang)
    try:
        payload = await fetcher(url)
    except FetchError as exc:
        logger.debug("MyMemory fetch failed: %s", exc)
        return StatisticalResult.not_found()
    try:
        translated = parse_mymemory_payload(payload)
    except (ValueError, TypeError) as exc:
        logger.debug("MyMemory parse failed: %s", exc)
        return StatisticalResult.not_found()
    if translated is None or is_degenerate_translation(text, translated):
        logger.debug("MyMemory returned no usable translation for %r", text)
        return StatisticalResult.not_found()
    cleaned = clean_translation(translated)
    if not cleaned:
        return StatisticalResult.not_found()
    return StatisticalResult(found=True, translation=cleaned)


def parse_mymemory_payload(payload: str) -> str | None:
    raw_data: object = json.loads(payload)
    if not _is_str_dict(raw_data):
        return None
    if _as_status(raw_data.get("responseStatus")) != 200:
        return None
    response_data = raw_data.get("responseData")
    if not _is_str_dict(response_data):
        return None
    translated = response_data.get("translatedText")
    if isinstance(translated, str) and translated.strip():
        return translated.strip()
    return None


def _as_status(value: object) -> int | None:
    # The API reports the status as either an int or a numeric string.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _is_str_dict(value: object) -> TypeGuard[dict[str, object]]:
    return isinstance(value, dict)
