from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path

from config.settings import TaskConfig, validate_task_config
from game.errors import InvalidConfigError


logger = logging.getLogger(__name__)


def load_task_config(settings_path: Path, base: TaskConfig = TaskConfig()) -> TaskConfig:
    if not settings_path.exists():
        save_task_config(settings_path, base)
        return validate_task_config(base)

    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("cannot read task settings %s (%s), using defaults", settings_path, exc)
        return validate_task_config(base)
    if not isinstance(payload, dict):
        logger.warning("task settings %s is not a JSON object, using defaults", settings_path)
        return validate_task_config(base)

    # тип поля берём из значения по умолчанию: base мог быть собран с int вместо float
    known = {f.name: type(f.default) for f in fields(TaskConfig)}
    overrides = {}
    for key, value in payload.items():
        if key not in known:
            continue
        overrides[key] = _coerce(key, value, known[key], settings_path)
    return validate_task_config(replace(base, **overrides))


def _coerce(key: str, value, target: type, settings_path: Path):
    # bool is an int subclass, and int(20.9) would silently drop the fraction
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigError(f"{key}={value!r} in {settings_path} must be a number")
    if target is int and not float(value).is_integer():
        raise InvalidConfigError(f"{key}={value!r} in {settings_path} must be a whole number")
    return target(value)


def save_task_config(settings_path: Path, cfg: TaskConfig) -> None:
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(
        json.dumps(asdict(cfg), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
