"""Embedded learning-data store.

The whole database lives in an in-memory SQLite connection. After every
command the connection is serialized and the blob replaces the previous
snapshot in the slot, so the slot always holds the last committed state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
import logging
import sqlite3

from lyrics_logic.errors import (
    InvalidLineError,
    StoreInitializationError,
    StoreNotInitializedError,
    StoreWriteError,
    UnknownRecordError,
)
from lyrics_logic.models import (
    Language,
    LearningSession,
    ProgressRecord,
    Song,
    VocabularyEntry,
    VocabularyUpdate,
)
from lyrics_logic.storage.schema import (
    REQUIRED_TABLES,
    SAMPLE_SONGS,
    SCHEMA_STATEMENTS,
    SUPPORTED_LANGUAGES,
    LanguageSeed,
)
from lyrics_logic.storage.snapshot import DEFAULT_SNAPSHOT_KEY, SnapshotSlot

Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LearningStore:
    def __init__(
        self,
        slot: SnapshotSlot,
        *,
        snapshot_key: str = DEFAULT_SNAPSHOT_KEY,
        languages: Sequence[LanguageSeed] = SUPPORTED_LANGUAGES,
        seed_samples: bool = False,
        clock: Clock = _utc_now,
    ) -> None:
        self.snapshot_key = snapshot_key
        self._slot = slot
        self._languages = tuple(languages)
        self._seed_samples = seed_samples
        self._clock = clock
        self._connection: sqlite3.Connection | None = None
        self._last_saved: bytes | None = None

    @property
    def is_initialized(self) -> bool:
        return self._connection is not None

    def initialize(self) -> None:
        if self._connection is not None:
            return
        try:
            blob = self._slot.load(self.snapshot_key)
        except OSError as exc:
            raise StoreInitializationError(
                f"Snapshot storage unavailable: {exc}"
            ) from exc
        connection = _open_connection()
        try:
            if blob is None:
                self._create(connection)
            else:
                _restore(connection, blob)
            data = connection.serialize()
            if blob is None:
                self._slot.save(self.snapshot_key, data)
        except StoreInitializationError:
            connection.close()
            raise
        except (sqlite3.Error, OSError) as exc:
            connection.close()
            raise StoreInitializationError(
                f"Cannot open learning store: {exc}"
            ) from exc
        self._connection = connection
        self._last_saved = data
        logger.info(
            "Learning store ready (%s, %d bytes)",
            "created" if blob is None else "restored",
            len(data),
        )

    def close(self) -> None:
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        self._last_saved = None

    def export_snapshot(self) -> bytes:
        return self._require_connection().serialize()

    # Commands

    def add_song(
        self,
        title: str,
        artist: str,
        language_id: int,
        lyrics: str,
        vocabulary: Sequence[VocabularyUpdate] = (),
    ) -> Song:
        """Insert a song and upsert its vocabulary as a single command.

        Either the song and every word are saved together or nothing is.
        """
        _check_updates(vocabulary)
        with self._command() as connection:
            self._require_language(connection, language_id)
            cursor = connection.execute(
                """
                INSERT INTO songs (title, artist, language_id, lyrics, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (title.strip(), artist.strip(), language_id, lyrics, self._now()),
            )
            song_id = int(cursor.lastrowid or 0)
            for update in vocabulary:
                self._upsert_word(connection, update, language_id, song_id)
        song = self.song(song_id)
        if song is None:
            raise UnknownRecordError("song", song_id)
        return song

    def upsert_vocabulary(
        self,
        word: str,
        translation: str,
        language_id: int,
        song_id: int | None = None,
        *,
        occurrences: int = 1,
    ) -> VocabularyEntry:
        update = VocabularyUpdate(word.strip(), translation, occurrences)
        self.upsert_vocabulary_batch(language_id, [update], song_id)
        entry = self.vocabulary_entry(update.word, language_id)
        if entry is None:
            raise UnknownRecordError("vocabulary", update.word)
        return entry

    def upsert_vocabulary_batch(
        self,
        language_id: int,
        updates: Sequence[VocabularyUpdate],
        song_id: int | None = None,
    ) -> None:
        _check_updates(updates)
        with self._command() as connection:
            self._require_language(connection, language_id)
            if song_id is not None:
                self._require_song(connection, song_id)
            for update in updates:
                self._upsert_word(connection, update, language_id, song_id)

    def backfill_translation(self, entry_id: int, translation: str) -> VocabularyEntry:
        with self._command() as connection:
            cursor = connection.execute(
                "UPDATE vocabulary SET translation = ? WHERE id = ?",
                (translation.strip(), entry_id),
            )
            if cursor.rowcount == 0:
                raise UnknownRecordError("vocabulary", entry_id)
        row = self._fetch_one(
            "SELECT * FROM vocabulary WHERE id = ?", (entry_id,)
        )
        if row is None:
            raise UnknownRecordError("vocabulary", entry_id)
        return _row_to_vocabulary(row)

    def upsert_progress(
        self, song_id: int, line: int, completed: bool
    ) -> ProgressRecord:
        if line < 0:
            raise InvalidLineError(line)
        with self._command() as connection:
            self._require_song(connection, song_id)
            connection.execute(
                """
                INSERT INTO progress (
                    song_id, current_line, completed, sessions, last_accessed
                ) VALUES (?, ?, ?, 1, ?)
                ON CONFLICT(song_id) DO UPDATE SET
                    current_line = excluded.current_line,
                    completed = excluded.completed,
                    sessions = progress.sessions + 1,
                    last_accessed = excluded.last_accessed
                """,
                (song_id, line, int(completed), self._now()),
            )
        record = self.progress_for_song(song_id)
        if record is None:
            raise UnknownRecordError("song", song_id)
        return record

    def record_learning_session(
        self,
        song_id: int,
        vocabulary_learned: Sequence[str],
        duration_minutes: int = 0,
    ) -> LearningSession:
        if duration_minutes < 0:
            raise ValueError("Session duration must not be negative")
        words = [word.strip() for word in vocabulary_learned if word.strip()]
        with self._command() as connection:
            self._require_song(connection, song_id)
            cursor = connection.execute(
                """
                INSERT INTO learning_sessions (
                    song_id, vocabulary_learned, session_date, duration_minutes
                ) VALUES (?, ?, ?, ?)
                """,
                (song_id, ",".join(words), self._now(), duration_minutes),
            )
            session_id = cursor.lastrowid
        row = self._fetch_one(
            "SELECT * FROM learning_sessions WHERE id = ?", (session_id,)
        )
        if row is None:
            raise UnknownRecordError("learning session", int(session_id or 0))
        return _row_to_learning_session(row)

    # Queries

    def list_languages(self) -> list[Language]:
        rows = self._fetch_all("SELECT * FROM languages ORDER BY name ASC", ())
        return [_row_to_language(row) for row in rows]

    def language(self, language_id: int) -> Language | None:
        row = self._fetch_one("SELECT * FROM languages WHERE id = ?", (language_id,))
        return _row_to_language(row) if row is not None else None

    def language_by_code(self, code: str) -> Language | None:
        row = self._fetch_one(
            "SELECT * FROM languages WHERE code = ?", (code.strip().lower(),)
        )
        return _row_to_language(row) if row is not None else None

    def songs_by_language(self, language_id: int) -> list[Song]:
        rows = self._fetch_all(
            """
            SELECT * FROM songs WHERE language_id = ?
            ORDER BY created_at DESC, id DESC
            """,
            (language_id,),
        )
        return [_row_to_song(row) for row in rows]

    def song(self, song_id: int) -> Song | None:
        row = self._fetch_one("SELECT * FROM songs WHERE id = ?", (song_id,))
        return _row_to_song(row) if row is not None else None

    def vocabulary_by_language(self, language_id: int) -> list[VocabularyEntry]:
        rows = self._fetch_all(
            """
            SELECT * FROM vocabulary WHERE language_id = ?
            ORDER BY frequency_count DESC, word ASC
            """,
            (language_id,),
        )
        return [_row_to_vocabulary(row) for row in rows]

    def vocabulary_entry(self, word: str, language_id: int) -> VocabularyEntry | None:
        row = self._fetch_one(
            "SELECT * FROM vocabulary WHERE word = ? AND language_id = ?",
            (word.strip(), language_id),
        )
        return _row_to_vocabulary(row) if row is not None else None

    def progress_for_song(self, song_id: int) -> ProgressRecord | None:
        row = self._fetch_one("SELECT * FROM progress WHERE song_id = ?", (song_id,))
        return _row_to_progress(row) if row is not None else None

    def learning_sessions_for_song(self, song_id: int) -> list[LearningSession]:
        rows = self._fetch_all(
            """
            SELECT * FROM learning_sessions WHERE song_id = ?
            ORDER BY session_date DESC, id DESC
            """,
            (song_id,),
        )
        return [_row_to_learning_session(row) for row in rows]

    # Internals

    @contextmanager
    def _command(self) -> Iterator[sqlite3.Connection]:
        connection = self._require_connection()
        with connection:
            yield connection
        self._persist(connection)

    def _persist(self, connection: sqlite3.Connection) -> None:
        data = connection.serialize()
        try:
            self._slot.save(self.snapshot_key, data)
        except Exception as exc:
            logger.warning("Snapshot save failed, rolling back: %s", exc)
            if self._last_saved is not None:
                connection.deserialize(self._last_saved)
                connection.execute("PRAGMA foreign_keys = ON")
            raise StoreWriteError(f"Cannot save learning store: {exc}") from exc
        self._last_saved = data

    def _create(self, connection: sqlite3.Connection) -> None:
        now = self._now()
        with connection:
            for statement in SCHEMA_STATEMENTS:
                connection.execute(statement)
            connection.executemany(
                "INSERT OR IGNORE INTO languages (name, code, created_at) VALUES (?, ?, ?)",
                [(seed.name, seed.code, now) for seed in self._languages],
            )
            if self._seed_samples:
                for sample in SAMPLE_SONGS:
                    connection.execute(
                        """
                        INSERT INTO songs (title, artist, language_id, lyrics, created_at)
                        SELECT ?, ?, id, ?, ? FROM languages WHERE code = ?
                        """,
                        (
                            sample.title,
                            sample.artist,
                            sample.lyrics,
                            now,
                            sample.language_code,
                        ),
                    )

    def _upsert_word(
        self,
        connection: sqlite3.Connection,
        update: VocabularyUpdate,
        language_id: int,
        song_id: int | None,
    ) -> None:
        # An existing entry keeps its translation and first song; only the count grows.
        connection.execute(
            """
            INSERT INTO vocabulary (
                word, translation, language_id, frequency_count,
                first_song_id, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(word, language_id) DO UPDATE SET
                frequency_count = vocabulary.frequency_count
                    + excluded.frequency_count
            """,
            (
                update.word.strip(),
                update.translation or "",
                language_id,
                update.occurrences,
                song_id,
                self._now(),
            ),
        )

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise StoreNotInitializedError()
        return self._connection

    def _require_language(self, connection: sqlite3.Connection, language_id: int) -> None:
        row = connection.execute(
            "SELECT 1 FROM languages WHERE id = ?", (language_id,)
        ).fetchone()
        if row is None:
            raise UnknownRecordError("language", language_id)

    def _require_song(self, connection: sqlite3.Connection, song_id: int) -> None:
        row = connection.execute("SELECT 1 FROM songs WHERE id = ?", (song_id,)).fetchone()
        if row is None:
            raise UnknownRecordError("song", song_id)

    def _fetch_one(self, sql: str, params: tuple[object, ...]) -> sqlite3.Row | None:
        row: sqlite3.Row | None = self._require_connection().execute(sql, params).fetchone()
        return row

    def _fetch_all(self, sql: str, params: tuple[object, ...]) -> list[sqlite3.Row]:
        return list(self._require_connection().execute(sql, params).fetchall())

    def _now(self) -> str:
        return self._clock().isoformat(timespec="microseconds")


def _check_updates(updates: Sequence[VocabularyUpdate]) -> None:
    for update in updates:
        if not update.word.strip():
            raise ValueError("Vocabulary word must not be empty")
        if update.occurrences < 1:
            raise ValueError(f"occurrences must be at least 1 for {update.word!r}")


def _open_connection() -> sqlite3.Connection:
    connection = sqlite3.connect(":memory:")
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    return connection


def _restore(connection: sqlite3.Connection, blob: bytes) -> None:
    connection.deserialize(blob)
    connection.execute("PRAGMA foreign_keys = ON")
    check = connection.execute("PRAGMA quick_check").fetchone()
    if check is None or check[0] != "ok":
        raise StoreInitializationError("Learning store snapshot is corrupt")
    tables = {
        row[0]
        for row in connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()
    }
    missing = REQUIRED_TABLES - tables
    if missing:
        raise StoreInitializationError(
            f"Learning store snapshot is missing tables: {', '.join(sorted(missing))}"
        )


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _row_to_language(row: sqlite3.Row) -> Language:
    return Language(
        id=row["id"],
        name=row["name"],
        code=row["code"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def _row_to_song(row: sqlite3.Row) -> Song:
    return Song(
        id=row["id"],
        title=row["title"],
        artist=row["artist"],
        language_id=row["language_id"],
        lyrics=row["lyrics"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def _row_to_vocabulary(row: sqlite3.Row) -> VocabularyEntry:
    return VocabularyEntry(
        id=row["id"],
        word=row["word"],
        translation=row["translation"] or "",
        language_id=row["language_id"],
        frequency_count=row["frequency_count"],
        first_song_id=row["first_song_id"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def _row_to_progress(row: sqlite3.Row) -> ProgressRecord:
    return ProgressRecord(
        id=row["id"],
        song_id=row["song_id"],
        current_line=row["current_line"],
        completed=bool(row["completed"]),
        sessions=row["sessions"],
        last_accessed=_parse_timestamp(row["last_accessed"]),
    )


def _row_to_learning_session(row: sqlite3.Row) -> LearningSession:
    learned = row["vocabulary_learned"] or ""
    return LearningSession(
        id=row["id"],
        song_id=row["song_id"],
        vocabulary_learned=tuple(word for word in learned.split(",") if word),
        session_date=_parse_timestamp(row["session_date"]),
        duration_minutes=row["duration_minutes"],
    )
