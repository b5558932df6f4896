from __future__ import annotations

from dataclasses import dataclass
from typing import Final

REQUIRED_TABLES: Final[frozenset[str]] = frozenset(
    {"languages", "songs", "vocabulary", "progress", "learning_sessions"}
)

SCHEMA_STATEMENTS: Final[tuple[str, ...]] = (
    """
    CREATE TABLE IF NOT EXISTS languages (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        code TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS songs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        artist TEXT NOT NULL,
        language_id INTEGER NOT NULL,
        lyrics TEXT NOT NULL,
        created_at TEXT NOT NULL,
        FOREIGN KEY (language_id) REFERENCES languages (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS vocabulary (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        word TEXT NOT NULL,
        translation TEXT NOT NULL DEFAULT '',
        language_id INTEGER NOT NULL,
        frequency_count INTEGER NOT NULL DEFAULT 1 CHECK (frequency_count >= 1),
        first_song_id INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY (language_id) REFERENCES languages (id),
        FOREIGN KEY (first_song_id) REFERENCES songs (id),
        UNIQUE (word, language_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS progress (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        song_id INTEGER NOT NULL UNIQUE,
        current_line INTEGER NOT NULL DEFAULT 0,
        completed INTEGER NOT NULL DEFAULT 0,
        sessions INTEGER NOT NULL DEFAULT 1,
        last_accessed TEXT NOT NULL,
        FOREIGN KEY (song_id) REFERENCES songs (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS learning_sessions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        song_id INTEGER NOT NULL,
        vocabulary_learned TEXT NOT NULL DEFAULT '',
        session_date TEXT NOT NULL,
        duration_minutes INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY (song_id) REFERENCES songs (id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_songs_language ON songs(language_id)",
    "CREATE INDEX IF NOT EXISTS idx_vocabulary_language ON vocabulary(language_id)",
    "CREATE INDEX IF NOT EXISTS idx_vocabulary_word ON vocabulary(word)",
    "CREATE INDEX IF NOT EXISTS idx_learning_sessions_song ON learning_sessions(song_id)",
)


@dataclass(frozen=True, slots=True)
class LanguageSeed:
    name: str
    code: str


@dataclass(frozen=True, slots=True)
class SongSeed:
    title: str
    artist: str
    language_code: str
    lyrics: str


SUPPORTED_LANGUAGES: Final[tuple[LanguageSeed, ...]] = (
    LanguageSeed("Korean", "ko"),
    LanguageSeed("Spanish", "es"),
    LanguageSeed("French", "fr"),
    LanguageSeed("Japanese", "ja"),
    LanguageSeed("German", "de"),
    LanguageSeed("Italian", "it"),
    LanguageSeed("Portuguese", "pt"),
    LanguageSeed("Chinese", "zh"),
    LanguageSeed("Hindi", "hi"),
    LanguageSeed("Hausa", "ha"),
    LanguageSeed("Arabic", "ar"),
    LanguageSeed("Swahili", "sw"),
)

SAMPLE_SONGS: Final[tuple[SongSeed, ...]] = (
    SongSeed(
        title="Hello My Love",
        artist="Sample Artist",
        language_code="ko",
        lyrics="\n".join(
            (
                "안녕 내 사랑 (Hello my love)",
                "너를 만나서 기뻐 (Happy to meet you)",
                "우리 함께 해 (Let's be together)",
                "사랑해 사랑해 (I love you, I love you)",
                "언제까지나 (Forever and ever)",
                "너와 함께 할게 (I'll be with you)",
            )
        ),
    ),
    SongSeed(
        title="Mi Amor",
        artist="Artista Ejemplo",
        language_code="es",
        lyrics="\n".join(
            (
                "Hola mi amor (Hello my love)",
                "Te quiero mucho (I love you so much)",
                "Eres mi vida (You are my life)",
                "Mi corazón (My heart)",
                "Siempre contigo (Always with you)",
                "Para siempre (Forever)",
            )
        ),
    ),
)
