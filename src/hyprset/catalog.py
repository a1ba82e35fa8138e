"""Mode and keyboard-layout catalogs.

Parses the flat ``WxH@RHz`` token lists from ``hyprctl monitors``, the
xkb ``base.lst`` layout list, and the ``keyboards`` array of
``hyprctl devices -j``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from .models import Keyboard, LocaleInfo, Mode, parse_resolution
from .utils import XKB_BASE_LST

log = logging.getLogger(__name__)

DEFAULT_LOCALES = ["us"]

# Substrings of device names that are never real keyboards
_KEYBOARD_DENY = (
    "power-button", "power button", "sleep-button", "sleep button",
    "video bus", "headset", "camera", "mic", "mouse", "pointer",
    "hotkeys", "virtual", "system-control", "consumer-control",
    "fcitx", "usb-receiver",
)
_KEYBOARD_ALLOW = ("corne", "tkl", "logitech")


# ── Display modes ────────────────────────────────────────────────────────

def parse_mode_token(token: str) -> Mode | None:
    """Parse ``2560x1440@59.95Hz``; None if the token has another shape."""
    resolution, sep, rate_str = token.partition("@")
    if not sep or not rate_str.endswith("Hz"):
        return None
    try:
        rate = float(rate_str[:-2])
    except ValueError:
        return None
    return Mode(resolution=resolution, refresh_rate=rate)


def parse_modes(text: str) -> list[Mode]:
    """Parse whitespace-separated mode tokens, skipping malformed ones."""
    modes: list[Mode] = []
    for token in text.split():
        mode = parse_mode_token(token)
        if mode is None:
            log.debug("Skipping malformed mode token %r", token)
            continue
        modes.append(mode)
    return modes


def unique_resolutions(modes: Iterable[Mode]) -> list[str]:
    """Distinct resolutions, largest pixel area first."""
    seen: list[str] = []
    for m in modes:
        if m.resolution not in seen:
            seen.append(m.resolution)

    def area(res: str) -> int:
        w, h = parse_resolution(res)
        return w * h

    # sorted() is stable, so equal areas keep source order
    return sorted(seen, key=area, reverse=True)


def refresh_rates_for(modes: Iterable[Mode], resolution: str) -> list[float]:
    """All refresh rates offered at *resolution*, in source order."""
    return [m.refresh_rate for m in modes if m.resolution == resolution]


def format_rate(rate: float) -> str:
    return f"{rate:.2f}Hz"


def parse_rate_label(label: str, default: float = 60.0) -> float:
    """Inverse of format_rate(); *default* if the label is unusable."""
    try:
        return float(label.strip().removesuffix("Hz"))
    except ValueError:
        return default


# ── Keyboard layouts ─────────────────────────────────────────────────────

def parse_locale_catalog(text: str) -> list[LocaleInfo]:
    """Parse the ``! layout`` section of an xkb rules ``.lst`` file."""
    locales: list[LocaleInfo] = []
    in_layout = False
    for line in text.splitlines():
        if line.strip() == "! layout":
            in_layout = True
            continue
        if not in_layout:
            continue
        if line.startswith("!"):
            break
        if not line.startswith("  "):
            continue
        parts = line.strip().split(None, 1)
        if len(parts) != 2:
            continue
        locales.append(LocaleInfo(code=parts[0].strip(), label=parts[1].strip()))
    return locales


def load_locale_catalog(path: Path | str = XKB_BASE_LST) -> list[LocaleInfo]:
    """Read and parse the system layout catalog. Raises OSError."""
    return parse_locale_catalog(Path(path).read_text(encoding="utf-8"))


def parse_device_layouts(json_text: str) -> list[Keyboard]:
    """Parse ``hyprctl devices -j`` output into keyboards.

    Raises ValueError if the text is not a JSON object with a
    ``keyboards`` array.
    """
    data = json.loads(json_text)
    if not isinstance(data, dict) or not isinstance(data.get("keyboards"), list):
        raise ValueError("devices reply has no 'keyboards' array")
    return [
        Keyboard(name=kb.get("name", ""), layout=kb.get("layout", ""))
        for kb in data["keyboards"]
        if isinstance(kb, dict)
    ]


def first_layout_codes(keyboards: list[Keyboard]) -> list[str]:
    """Layout codes of the first keyboard, taken as representative."""
    if not keyboards:
        return []
    return keyboards[0].layout_codes


def is_physical_keyboard(name: str) -> bool:
    """Heuristic: hyprctl lists power buttons, headsets etc. as keyboards."""
    n = name.lower()
    if any(p in n for p in _KEYBOARD_DENY):
        return False
    if "keyboard" in n:
        return True
    return any(p in n for p in _KEYBOARD_ALLOW)
