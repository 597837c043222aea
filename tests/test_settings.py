"""Tests for settings file I/O."""

import json
from pathlib import Path

import pytest

import edgebar_groups.settings as settings


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.delenv("EDGEBAR_GROUPS_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))


def test_config_path_uses_xdg(tmp_path):
    assert settings.get_config_path() == tmp_path / "edgebar-groups" / "settings.json"


def test_config_path_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("EDGEBAR_GROUPS_CONFIG", str(tmp_path / "x.json"))
    assert settings.get_config_path() == Path(tmp_path / "x.json")


def test_save_then_read():
    written = settings.save_settings({"toggle": False, "groups": {"left": []}})
    assert written == settings.get_config_path()
    assert settings.read_settings_file(written) == {"toggle": False, "groups": {"left": []}}
    # No temp files left behind.
    assert [p.name for p in written.parent.iterdir()] == ["settings.json"]


def test_read_settings_file_is_strict(tmp_path):
    path = tmp_path / "s.json"
    assert settings.read_settings_file(path) is None
    path.write_text("[1]")
    with pytest.raises(ValueError):
        settings.read_settings_file(path)
    path.write_text("{bad")
    with pytest.raises(json.JSONDecodeError):
        settings.read_settings_file(path)
