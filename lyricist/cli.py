from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from lyrics_app.app import LearningApp
from lyrics_app.config import load_config
from lyrics_logic.errors import LearningDataError, StoreInitializationError
from lyrics_logic.models import Language, ProgressRecord, TranslationResult


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Learn vocabulary from song lyrics."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.json (defaults to the user config directory).",
    )
    parser.add_argument(
        "--format",
        choices=("lines", "json"),
        default="lines",
        help="Output format.",
    )
    parser.add_argument("--verbose", action="store_true")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("languages", help="List supported languages.")

    songs = commands.add_parser("songs", help="List songs for a language.")
    songs.add_argument("language", help="Language code, e.g. ko.")

    add_song = commands.add_parser("add-song", help="Upload lyrics for a song.")
    add_song.add_argument("language", help="Language code, e.g. ko.")
    add_song.add_argument("--title", required=True)
    add_song.add_argument("--artist", required=True)
    add_song.add_argument(
        "--lyrics-file",
        type=Path,
        default=None,
        help="Read lyrics from this file instead of stdin.",
    )

    vocab = commands.add_parser("vocab", help="Show vocabulary for a language.")
    vocab.add_argument("language", help="Language code, e.g. ko.")
    vocab.add_argument("--limit", type=int, default=0)

    progress = commands.add_parser("progress", help="Show or update song progress.")
    progress.add_argument("song_id", type=int)
    progress.add_argument("--line", type=int, default=None)
    progress.add_argument(
        "--complete",
        action="store_true",
        help="Mark the given line as completed and advance.",
    )

    translate = commands.add_parser("translate", help="Translate a word or line.")
    translate.add_argument("text")
    translate.add_argument("--source", required=True, help="Source language code.")
    return parser


def _emit(payload: object, as_json: bool, lines: list[str]) -> None:
    if as_json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    for line in lines:
        print(line)


def _require_language(app: LearningApp, code: str) -> Language:
    language = app.language_by_code(code)
    if language is None:
        raise SystemExit(f"Unknown language code: {code}")
    return language


def _progress_payload(record: ProgressRecord | None) -> dict[str, object] | None:
    if record is None:
        return None
    return {
        "song_id": record.song_id,
        "current_line": record.current_line,
        "completed": record.completed,
        "sessions": record.sessions,
        "last_accessed": record.last_accessed.isoformat(),
    }


def _translation_payload(result: TranslationResult) -> dict[str, object]:
    return {
        "text": result.text,
        "confidence": result.confidence,
        "source": result.source.value,
        "pronunciation": result.pronunciation,
        "part_of_speech": result.part_of_speech,
        "example": result.example,
    }


async def _run(args: argparse.Namespace) -> int:
    app = LearningApp.create(load_config(args.config))
    try:
        app.initialize()
    except StoreInitializationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    as_json = args.format == "json"
    try:
        if args.command == "languages":
            languages = app.list_languages()
            _emit(
                [{"id": item.id, "name": item.name, "code": item.code} for item in languages],
                as_json,
                [f"{item.id}. {item.name} ({item.code})" for item in languages],
            )
        elif args.command == "songs":
            language = _require_language(app, args.language)
            songs = app.songs_for(language.id)
            _emit(
                [
                    {"id": song.id, "title": song.title, "artist": song.artist}
                    for song in songs
                ],
                as_json,
                [f"{song.id}. {song.title} - {song.artist}" for song in songs],
            )
        elif args.command == "add-song":
            language = _require_language(app, args.language)
            if args.lyrics_file is not None:
                lyrics = args.lyrics_file.read_text(encoding="utf-8")
            else:
                lyrics = sys.stdin.read()
            outcome = app.add_song(args.title, args.artist, language.id, lyrics)
            if not outcome.is_ok:
                print(f"error: {outcome.error}", file=sys.stderr)
                return 1
            song_id = outcome.unwrap()
            _emit({"song_id": song_id}, as_json, [f"song_id: {song_id}"])
        elif args.command == "vocab":
            language = _require_language(app, args.language)
            entries = app.vocabulary_for(language.id)
            if args.limit > 0:
                entries = entries[: args.limit]
            _emit(
                [
                    {
                        "word": entry.word,
                        "translation": entry.translation,
                        "frequency": entry.frequency_count,
                    }
                    for entry in entries
                ],
                as_json,
                [
                    f"{entry.word}\t{entry.frequency_count}\t{entry.translation}"
                    for entry in entries
                ],
            )
        elif args.command == "progress":
            if args.line is None:
                record = app.progress_for(args.song_id)
            else:
                outcome = (
                    app.complete_line(args.song_id, args.line)
                    if args.complete
                    else app.go_to_line(args.song_id, args.line)
                )
                if not outcome.is_ok:
                    print(f"error: {outcome.error}", file=sys.stderr)
                    return 1
                record = outcome.unwrap()
            payload = _progress_payload(record)
            _emit(
                payload,
                as_json,
                ["no progress yet"]
                if record is None
                else [
                    f"line: {record.current_line}",
                    f"completed: {record.completed}",
                    f"sessions: {record.sessions}",
                ],
            )
        elif args.command == "translate":
            result = await app.translate(args.text, args.source)
            _emit(
                _translation_payload(result),
                as_json,
                [result.text, f"confidence: {result.confidence:.2f}"],
            )
    except (LearningDataError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        await app.aclose()
    return 0


def main() -> int:
    args = _build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
