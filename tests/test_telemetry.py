from __future__ import annotations

import json
from pathlib import Path

import pytest

from lyrics_app.app import text_fields
from lyrics_app.telemetry import Event, EventLog, default_log_path


def test_events_are_written_as_json_lines(tmp_path: Path) -> None:
    log = EventLog(path=tmp_path / "lyrics.log")

    log.record(Event.SONG_ADDED, song_id=3, language="ko", **text_fields("사랑"))
    log.record_failure(Event.PROGRESS_FAILED, ValueError("bad line"), song_id=3, line=9)
    log.close()

    lines = (tmp_path / "lyrics.log").read_text(encoding="utf-8").splitlines()
    first, second = (json.loads(line) for line in lines)
    assert first["event"] == "song_added"
    assert first["song_id"] == 3
    assert first["text_len"] == 2
    assert second["event"] == "progress_failed"
    assert second["error_type"] == "ValueError"
    assert second["line"] == 9


def test_unknown_fields_are_rejected(tmp_path: Path) -> None:
    log = EventLog(path=tmp_path / "lyrics.log", enabled=False)

    with pytest.raises(ValueError):
        log.record(Event.STORE_READY, lyrics="full text")


def test_disabled_log_writes_nothing(tmp_path: Path) -> None:
    log = EventLog(path=tmp_path / "lyrics.log", enabled=False)

    log.record(Event.STORE_READY, languages=12)

    assert not log.is_open
    assert not (tmp_path / "lyrics.log").exists()


def test_environment_controls_path_and_switch(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("LYRICS_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LYRICS_LOGGING", "1")

    log = EventLog.from_environment()

    assert default_log_path() == tmp_path / "lyrics.log"
    assert log.path == tmp_path / "lyrics.log"
    assert log.enabled is True


def test_text_fields_hide_the_text() -> None:
    fields = text_fields("amor")

    assert fields["text_len"] == 4
    assert "amor" not in str(fields["text_hash"])
    assert text_fields("") == {"text_len": 0, "text_hash": ""}
