"""Where session logs and task settings live on disk."""

import os
import sys
from pathlib import Path
from typing import List


APP_NAME = "GoNoGo"
DATA_DIR_ENV = "GONOGO_DATA_DIR"


def platform_data_root(platform: str = sys.platform) -> Path:
    if platform.startswith("win"):
        return Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    if platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def data_dir_candidates() -> List[Path]:
    override = os.getenv(DATA_DIR_ENV)
    if override:
        # явно заданный каталог не подменяем: если он недоступен, это ошибка
        return [Path(override).expanduser()]
    return [platform_data_root() / APP_NAME, Path.cwd() / f".{APP_NAME.lower()}"]


def app_data_dir() -> Path:
    error = None
    for candidate in data_dir_candidates():
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = e
            continue
        return candidate
    raise error


def app_data_path(*parts: str) -> Path:
    return app_data_dir().joinpath(*parts)
