from __future__ import annotations

from lyrics_app.platform.paths import APP_DIR_NAME as APP_DIR_NAME
from lyrics_app.platform.paths import user_config_home as user_config_home
from lyrics_app.platform.paths import user_data_home as user_data_home

__all__ = ["APP_DIR_NAME", "user_config_home", "user_data_home"]
