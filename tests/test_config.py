from __future__ import annotations

import json
from pathlib import Path

from lyrics_app import config
from lyrics_app.platform import paths


def test_missing_config_file_yields_defaults(tmp_path: Path) -> None:
    loaded = config.load_config(tmp_path / "missing.json")

    assert loaded == config.default_config()


def test_broken_config_file_yields_defaults(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text("{not json", encoding="utf-8")

    assert config.load_config(target) == config.default_config()


def test_partial_config_overrides_only_valid_values(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text(
        json.dumps(
            {
                "storage": {"data_dir": str(tmp_path / "db"), "seed_samples": False},
                "translation": {"cache_capacity": 16, "timeout_s": -1},
                "ingestion": {"max_words": "many"},
            }
        ),
        encoding="utf-8",
    )

    loaded = config.load_config(target)
    defaults = config.default_config()

    assert loaded.storage.data_dir == tmp_path / "db"
    assert loaded.storage.seed_samples is False
    assert loaded.storage.snapshot_key == defaults.storage.snapshot_key
    assert loaded.translation.cache_capacity == 16
    assert loaded.translation.timeout_s == defaults.translation.timeout_s
    assert loaded.ingestion.max_words == defaults.ingestion.max_words


def test_saved_config_loads_back(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "config.json"
    original = config.AppConfig(
        storage=config.StorageConfig(
            data_dir=tmp_path / "data", snapshot_key="songs", seed_samples=False
        ),
        translation=config.TranslationConfig(
            target_lang="en", cache_capacity=32, timeout_s=2.5
        ),
        ingestion=config.IngestionConfig(max_words=20),
    )

    config.save_config(original, target)

    assert config.load_config(target) == original


def test_config_path_uses_xdg_config_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(paths.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert config.config_path() == tmp_path / "lyrics_learner" / "config.json"


def test_data_home_uses_xdg_data_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(paths.sys, "platform", "linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert paths.user_data_home() == tmp_path / "lyrics_learner"
