from __future__ import annotations

import json
from pathlib import Path
import sys

import pytest

from lyricist import cli


def _write_config(tmp_path: Path) -> Path:
    target = tmp_path / "config.json"
    target.write_text(
        json.dumps(
            {"storage": {"data_dir": str(tmp_path / "data"), "seed_samples": False}}
        ),
        encoding="utf-8",
    )
    return target


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["lyricist", *args])
    return cli.main()


def test_add_song_then_list_vocabulary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    config_file = _write_config(tmp_path)
    lyrics = tmp_path / "song.txt"
    lyrics.write_text("amor amor vida\nsiempre", encoding="utf-8")

    assert (
        _run(
            monkeypatch,
            "--config",
            str(config_file),
            "add-song",
            "es",
            "--title",
            "Mi Amor",
            "--artist",
            "Artista",
            "--lyrics-file",
            str(lyrics),
        )
        == 0
    )
    capsys.readouterr()

    code = _run(
        monkeypatch, "--config", str(config_file), "--format", "json", "vocab", "es"
    )

    assert code == 0

    entries = json.loads(capsys.readouterr().out)
    assert entries[0] == {"word": "amor", "translation": "love", "frequency": 2}
    assert (tmp_path / "data" / "languageSongsDB.sqlite3").exists()


def test_progress_for_unknown_song_reports_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    config_file = _write_config(tmp_path)

    code = _run(monkeypatch, "--config", str(config_file), "progress", "5", "--line", "0")

    assert code == 1
    assert "error:" in capsys.readouterr().err


def test_languages_are_listed(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    config_file = _write_config(tmp_path)

    assert _run(monkeypatch, "--config", str(config_file), "languages") == 0

    output = capsys.readouterr().out
    assert "Korean (ko)" in output
    assert "Swahili (sw)" in output
