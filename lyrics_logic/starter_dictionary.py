from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

COMMON_TRANSLATIONS: Final[Mapping[str, Mapping[str, str]]] = MappingProxyType(
    {
        "ko": {
            "사랑": "love",
            "너": "you",
            "나": "I/me",
            "우리": "we/us",
            "마음": "heart/mind",
            "시간": "time",
            "안녕": "hello/goodbye",
            "기뻐": "happy/glad",
            "함께": "together",
            "언제까지나": "forever",
            "만나서": "meeting/to meet",
        },
        "es": {
            "amor": "love",
            "corazón": "heart",
            "vida": "life",
            "hola": "hello",
            "mucho": "much/very",
            "siempre": "always",
            "para": "for",
            "contigo": "with you",
            "quiero": "I want/I love",
            "eres": "you are",
            "mi": "my",
        },
        "fr": {
            "amour": "love",
            "cœur": "heart",
            "vie": "life",
            "bonjour": "hello",
            "toujours": "always",
            "avec": "with",
            "pour": "for",
            "très": "very",
            "mon": "my",
            "tu": "you",
            "je": "I",
        },
        "ja": {
            "愛": "love",
            "心": "heart",
            "君": "you",
            "僕": "I (male)",
            "私": "I (female)",
            "時間": "time",
            "こんにちは": "hello",
            "いつも": "always",
            "一緒": "together",
            "大好き": "love very much",
        },
        "de": {
            "liebe": "love",
            "herz": "heart",
            "leben": "life",
            "hallo": "hello",
            "immer": "always",
            "mit": "with",
            "für": "for",
            "sehr": "very",
            "mein": "my",
            "du": "you",
            "ich": "I",
        },
        "it": {
            "amore": "love",
            "cuore": "heart",
            "vita": "life",
            "ciao": "hello/bye",
            "sempre": "always",
            "con": "with",
            "per": "for",
            "molto": "very",
            "mio": "my",
            "tu": "you",
            "io": "I",
        },
        "pt": {
            "amor": "love",
            "coração": "heart",
            "vida": "life",
            "olá": "hello",
            "sempre": "always",
            "com": "with",
            "para": "for",
            "muito": "very",
            "meu": "my",
            "você": "you",
            "eu": "I",
        },
        "zh": {
            "爱": "love",
            "心": "heart",
            "生活": "life",
            "你好": "hello",
            "总是": "always",
            "和": "with",
            "为": "for",
            "很": "very",
            "我的": "my",
            "你": "you",
            "我": "I",
        },
        "hi": {
            "प्रेम": "love",
            "दिल": "heart",
            "जीवन": "life",
            "नमस्ते": "hello",
            "हमेशा": "always",
            "साथ": "with",
            "बहुत": "very",
            "मेरा": "my",
            "तुम": "you",
            "मैं": "I",
        },
        "ar": {
            "حب": "love",
            "قلب": "heart",
            "حياة": "life",
            "مرحبا": "hello",
            "دائما": "always",
            "مع": "with",
            "جدا": "very",
            "لي": "my",
            "أنت": "you",
            "أنا": "I",
        },
    }
)


@dataclass(frozen=True, slots=True)
class StarterDictionary:
    entries: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: COMMON_TRANSLATIONS
    )

    def lookup(self, word: str, language_code: str) -> str:
        table = self.entries.get(language_code.strip().lower())
        if table is None:
            return ""
        return table.get(word.strip().lower(), "")

    def has_translation(self, word: str, language_code: str) -> bool:
        return self.lookup(word, language_code) != ""

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self.entries)
