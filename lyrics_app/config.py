from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Final

from lyrics_app.platform.paths import APP_DIR_NAME, user_config_home, user_data_home
from lyrics_logic.cache import DEFAULT_CACHE_CAPACITY
from lyrics_logic.http import DEFAULT_TIMEOUT_SECONDS
from lyrics_logic.storage.snapshot import DEFAULT_SNAPSHOT_KEY
from lyrics_logic.vocabulary import DEFAULT_MAX_WORDS

CONFIG_FILE_NAME: Final[str] = "config.json"
DEFAULT_TARGET_LANG: Final[str] = "en"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    snapshot_key: str
    seed_samples: bool


@dataclass(frozen=True, slots=True)
class TranslationConfig:
    target_lang: str
    cache_capacity: int
    timeout_s: float


@dataclass(frozen=True, slots=True)
class IngestionConfig:
    max_words: int


@dataclass(frozen=True, slots=True)
class AppConfig:
    storage: StorageConfig
    translation: TranslationConfig
    ingestion: IngestionConfig


def config_path() -> Path:
    return user_config_home() / APP_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> AppConfig:
    target = path or config_path()
    if not target.exists():
        return default_config()
    try:
        raw_data = target.read_text(encoding="utf-8")
        payload: object = json.loads(raw_data)
    except (OSError, json.JSONDecodeError):
        return default_config()
    return _parse_config(payload)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    target = path or config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    data = json.dumps(_config_to_dict(config), ensure_ascii=True, indent=2)
    target.write_text(data, encoding="utf-8")


def default_config() -> AppConfig:
    return AppConfig(
        storage=StorageConfig(
            data_dir=user_data_home(),
            snapshot_key=DEFAULT_SNAPSHOT_KEY,
            seed_samples=True,
        ),
        translation=TranslationConfig(
            target_lang=DEFAULT_TARGET_LANG,
            cache_capacity=DEFAULT_CACHE_CAPACITY,
            timeout_s=DEFAULT_TIMEOUT_SECONDS,
        ),
        ingestion=IngestionConfig(max_words=DEFAULT_MAX_WORDS),
    )


def _parse_config(payload: object) -> AppConfig:
    defaults = default_config()
    payload_dict = _get_dict(payload)
    if payload_dict is None:
        return defaults
    storage_data = _get_dict(payload_dict.get("storage")) or {}
    translation_data = _get_dict(payload_dict.get("translation")) or {}
    ingestion_data = _get_dict(payload_dict.get("ingestion")) or {}

    data_dir = _get_str(storage_data.get("data_dir"), "")
    storage = StorageConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else defaults.storage.data_dir,
        snapshot_key=_get_str(
            storage_data.get("snapshot_key"), defaults.storage.snapshot_key
        )
        or defaults.storage.snapshot_key,
        seed_samples=_get_bool(
            storage_data.get("seed_samples"), defaults.storage.seed_samples
        ),
    )
    translation = TranslationConfig(
        target_lang=_get_str(
            translation_data.get("target_lang"), defaults.translation.target_lang
        )
        or defaults.translation.target_lang,
        cache_capacity=_get_positive_int(
            translation_data.get("cache_capacity"),
            defaults.translation.cache_capacity,
        ),
        timeout_s=_get_positive_float(
            translation_data.get("timeout_s"), defaults.translation.timeout_s
        ),
    )
    ingestion = IngestionConfig(
        max_words=_get_positive_int(
            ingestion_data.get("max_words"), defaults.ingestion.max_words
        ),
    )
    return AppConfig(storage=storage, translation=translation, ingestion=ingestion)


def _config_to_dict(config: AppConfig) -> dict[str, object]:
    return {
        "storage": {
            "data_dir": str(config.storage.data_dir),
            "snapshot_key": config.storage.snapshot_key,
            "seed_samples": config.storage.seed_samples,
        },
        "translation": {
            "target_lang": config.translation.target_lang,
            "cache_capacity": config.translation.cache_capacity,
            "timeout_s": config.translation.timeout_s,
        },
        "ingestion": {"max_words": config.ingestion.max_words},
    }


def _get_dict(value: object | None) -> dict[str, object] | None:
    if isinstance(value, dict):
        output: dict[str, object] = {}
        for raw_key, raw_item in value.items():
            if isinstance(raw_key, str):
                output[raw_key] = raw_item
        return output
    return None


def _get_str(value: object | None, default: str) -> str:
    if isinstance(value, str):
        return value.strip()
    return default


def _get_bool(value: object | None, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


def _get_positive_int(value: object | None, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return default


def _get_positive_float(value: object | None, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)
    return default
