import json
import logging

import pytest

from config.settings import TaskConfig
from game.errors import InvalidConfigError
from game.runtime.task_settings import load_task_config, save_task_config


def test_missing_file_is_created_with_defaults(tmp_path):
    path = tmp_path / "nested" / "task_settings.json"
    cfg = load_task_config(path)
    assert cfg == TaskConfig()
    assert json.loads(path.read_text(encoding="utf-8"))["total_rounds"] == 20


def test_known_keys_override_defaults(tmp_path):
    path = tmp_path / "task_settings.json"
    path.write_text(
        json.dumps({"total_rounds": 30, "response_window_ms": 800, "go_probability": 0.8, "theme": "dark"}),
        encoding="utf-8",
    )
    cfg = load_task_config(path)
    assert cfg.total_rounds == 30
    assert cfg.response_window_ms == 800
    assert cfg.go_probability == 0.8
    assert cfg.min_interval_ms == 1500


def test_malformed_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "task_settings.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_task_config(path) == TaskConfig()
    assert "using defaults" in caplog.text


def test_non_object_falls_back_to_defaults(tmp_path):
    path = tmp_path / "task_settings.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_task_config(path) == TaskConfig()


@pytest.mark.parametrize(
    "payload",
    [
        {"total_rounds": 0},
        {"go_probability": 2},
        {"response_window_ms": "fast"},
        {"max_interval_ms": 100},
        {"total_rounds": 20.9},
        {"total_rounds": True},
        {"response_window_ms": 799.99},
        {"go_probability": False},
        {"lead_in_ms": None},
    ],
)
def test_invalid_values_are_rejected(tmp_path, payload):
    path = tmp_path / "task_settings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(InvalidConfigError):
        load_task_config(path)


def test_save_then_load(tmp_path):
    path = tmp_path / "task_settings.json"
    cfg = TaskConfig(total_rounds=12, go_probability=0.5, lead_in_ms=0)
    save_task_config(path, cfg)
    assert load_task_config(path) == cfg


def test_whole_floats_are_accepted_for_int_fields(tmp_path):
    path = tmp_path / "task_settings.json"
    path.write_text(json.dumps({"total_rounds": 12.0, "go_probability": 1}), encoding="utf-8")
    cfg = load_task_config(path)
    assert cfg.total_rounds == 12
    assert isinstance(cfg.total_rounds, int)
    assert cfg.go_probability == 1.0
    assert isinstance(cfg.go_probability, float)
