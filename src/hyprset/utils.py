"""Utility helpers: XDG/home paths, file I/O, app configuration."""

from __future__ import annotations

import json
import os
from pathlib import Path


APP_ID = "com.github.hyprset"

# Relative to the user's home directory
HYPR_CONFIG_PATH = ".config/hypr/hyprland.conf"
HYPR_OVERRIDES_PATH = ".config/hypr/conf-overrides.conf"

XKB_BASE_LST = "/usr/share/X11/xkb/rules/base.lst"


def home_dir() -> Path:
    """Return the current user's home directory.

    Raises RuntimeError if it cannot be determined.
    """
    return Path.home()


def config_dir() -> Path:
    """Return ~/.config/hyprset, creating it if needed."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    d = base / "hyprset"
    d.mkdir(parents=True, exist_ok=True)
    return d


def hyprland_runtime_dir() -> Path:
    """Return the Hyprland runtime directory for IPC sockets."""
    his = os.environ.get("HYPRLAND_INSTANCE_SIGNATURE", "")
    xdg = os.environ.get("XDG_RUNTIME_DIR", f"/run/user/{os.getuid()}")
    return Path(xdg) / "hypr" / his


def read_json(path: Path) -> dict | list | None:
    """Read and parse a JSON file, returning None on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def read_lines(path: Path) -> list[str]:
    """Read a text file as a list of lines without terminators."""
    return path.read_text(encoding="utf-8").splitlines()


def write_lines(path: Path, lines: list[str]) -> None:
    """Rewrite a text file, each line followed by one newline."""
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def _settings_path() -> Path:
    """Return the path to the global app settings file."""
    return config_dir() / "settings.json"


def load_app_settings() -> dict:
    """Load global application settings."""
    data = read_json(_settings_path())
    return data if isinstance(data, dict) else {}


