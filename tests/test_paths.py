import pytest

from game.runtime import paths


def test_env_override_wins(tmp_path, monkeypatch):
    target = tmp_path / "custom" / "nested"
    monkeypatch.setenv(paths.DATA_DIR_ENV, str(target))

    assert paths.app_data_dir() == target
    assert target.is_dir()
    assert paths.app_data_path("events.jsonl") == target / "events.jsonl"


def test_unusable_override_is_an_error(tmp_path, monkeypatch):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv(paths.DATA_DIR_ENV, str(blocker / "data"))

    with pytest.raises(OSError):
        paths.app_data_dir()


def test_platform_root_uses_xdg_on_linux(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    assert paths.platform_data_root("linux") == tmp_path / "xdg"


def test_platform_root_uses_appdata_on_windows(tmp_path, monkeypatch):
    monkeypatch.setenv("APPDATA", str(tmp_path / "roaming"))
    assert paths.platform_data_root("win32") == tmp_path / "roaming"


def test_falls_back_to_working_directory(tmp_path, monkeypatch):
    blocker = tmp_path / "blocked"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.delenv(paths.DATA_DIR_ENV, raising=False)
    monkeypatch.setattr(paths, "platform_data_root", lambda: blocker)
    monkeypatch.chdir(tmp_path)

    assert paths.app_data_dir() == tmp_path / ".gonogo"
    assert (tmp_path / ".gonogo").is_dir()
