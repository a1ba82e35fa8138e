"""Tests for path and file helpers."""

from __future__ import annotations

from hyprset.utils import (
    config_dir,
    hyprland_runtime_dir,
    load_app_settings,
    read_lines,
    write_lines,
)


def test_config_dir_follows_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config_dir() == tmp_path / "hyprset"
    assert (tmp_path / "hyprset").is_dir()


def test_runtime_dir(monkeypatch):
    monkeypatch.setenv("XDG_RUNTIME_DIR", "/run/user/1000")
    monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "abc_123")
    assert str(hyprland_runtime_dir()) == "/run/user/1000/hypr/abc_123"


class TestAppSettings:

    def test_missing_file_is_empty(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert load_app_settings() == {}

    def test_load(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "hyprset").mkdir()
        (tmp_path / "hyprset" / "settings.json").write_text(
            '{"default_locales": ["fi", "us"], "per_device_layouts": true}', encoding="utf-8",
        )
        assert load_app_settings() == {"default_locales": ["fi", "us"], "per_device_layouts": True}

    def test_non_object_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "hyprset").mkdir()
        (tmp_path / "hyprset" / "settings.json").write_text("[1, 2]", encoding="utf-8")
        assert load_app_settings() == {}


def test_lines_roundtrip(tmp_path):
    path = tmp_path / "f.conf"
    write_lines(path, ["# header", "input:sensitivity=0.2"])
    assert path.read_text(encoding="utf-8") == "# header\ninput:sensitivity=0.2\n"
    assert read_lines(path) == ["# header", "input:sensitivity=0.2"]
