"""Override file management: line classification and keyed upserts.

The override file is a secondary Hyprland config sourced from the end of
``hyprland.conf``.  Lines written by hyprset belong to a small, closed set
of setting families; each family has a literal prefix and a rule for the
key that distinguishes its instances (a monitor's name, or a fixed key for
global input options).  Upserting a line replaces the first existing line
with the same family and key, or appends it.  Lines outside every family
are never touched.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable

from .utils import (
    HYPR_CONFIG_PATH,
    HYPR_OVERRIDES_PATH,
    home_dir,
    read_lines,
    write_lines,
)

log = logging.getLogger(__name__)

OVERRIDES_HEADER = "# Hyprland configuration overrides"
INCLUDE_COMMENT = "# Include overrides configuration"


class NotConfiguredError(RuntimeError):
    """Hyprland is not installed or has no user configuration."""


# ── Line families ────────────────────────────────────────────────────────

class LineFamily(Enum):
    # Prefixes must stay mutually exclusive: classify() picks the first match.
    MONITOR = "monitor="
    KB_LAYOUT = "input:kb_layout="
    SENSITIVITY = "input:sensitivity="
    FORCE_NO_ACCEL = "input:force_no_accel="

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def replace_on_conflict(self) -> bool:
        return True

    def extract_key(self, line: str) -> str | None:
        """Return the identity key of *line* within this family, or None."""
        trimmed = line.strip()
        if not trimmed.startswith(self.prefix):
            return None

        if self is LineFamily.MONITOR:
            rest = trimmed[len(self.prefix):]
            comma = rest.find(",")
            if comma == -1:
                return None
            return rest[:comma]
        if self is LineFamily.KB_LAYOUT:
            return "kb_layout"
        if self is LineFamily.SENSITIVITY:
            return "sensitivity"
        if self is LineFamily.FORCE_NO_ACCEL:
            return "force_no_accel"
        raise AssertionError(f"unhandled family {self!r}")


def classify(line: str) -> tuple[LineFamily, str] | None:
    """Return ``(family, key)`` for a config line, or None if unclassified."""
    for family in LineFamily:
        key = family.extract_key(line)
        if key is not None:
            return family, key
    return None


# ── Line formatters ──────────────────────────────────────────────────────

def monitor_keyword_value(
    name: str, resolution: str, refresh_rate: float, position: tuple[int, int],
) -> str:
    """Value for ``hyprctl keyword monitor``: ``name,WxH@R,XxY,1``."""
    x, y = position
    return f"{name},{resolution}@{refresh_rate:g},{x}x{y},1"


def monitor_override(
    name: str, resolution: str, refresh_rate: float, position: tuple[int, int],
) -> str:
    """Generate a ``monitor=...`` override line."""
    return LineFamily.MONITOR.prefix + monitor_keyword_value(
        name, resolution, refresh_rate, position,
    )


def join_layout_codes(codes: Iterable[str]) -> str:
    """Join layout codes with commas, dropping blanks and repeats."""
    seen: list[str] = []
    for code in codes:
        code = code.strip()
        if code and code not in seen:
            seen.append(code)
    return ",".join(seen)


def locale_override(codes: Iterable[str]) -> str:
    """Generate ``input:kb_layout=us,fi`` from layout codes, keeping order."""
    return LineFamily.KB_LAYOUT.prefix + join_layout_codes(codes)


def sensitivity_override(sensitivity: float) -> str:
    """Generate ``input:sensitivity=...``; clamped to Hyprland's [-1, 1]."""
    value = max(-1.0, min(1.0, sensitivity))
    return f"{LineFamily.SENSITIVITY.prefix}{value:g}"


def force_no_accel_override(force_no_accel: bool) -> str:
    return f"{LineFamily.FORCE_NO_ACCEL.prefix}{1 if force_no_accel else 0}"


def device_block(name: str, layout: str) -> list[str]:
    """Render a per-device keyboard block as config lines."""
    return [
        "device {",
        f"    name = {name}",
        f"    kb_layout = {layout}",
        "}",
    ]


def find_device_block(lines: list[str], name: str) -> tuple[int, int] | None:
    """Locate the ``device { ... }`` block for *name*.

    Returns the inclusive ``(start, end)`` line indices, or None.  An
    unterminated block is ignored.
    """
    i = 0
    while i < len(lines):
        head = lines[i].strip()
        if head.startswith("device") and head.endswith("{"):
            end = i + 1
            while end < len(lines) and lines[end].strip() != "}":
                end += 1
            if end >= len(lines):
                return None
            for inner in lines[i + 1:end]:
                key, sep, value = inner.strip().partition("=")
                if sep and key.strip() == "name" and value.strip() == name:
                    return i, end
            i = end
        i += 1
    return None


# ── OverrideStore ────────────────────────────────────────────────────────

class OverrideStore:
    """Owns the override file and the include directive in hyprland.conf."""

    def __init__(
        self, config_path: Path, overrides_path: Path, source_ref: str | None = None,
    ) -> None:
        self.config_path = config_path
        self.overrides_path = overrides_path
        # Path as written into the ``source =`` directive
        self._source_ref = source_ref or str(overrides_path)

    @classmethod
    def default(cls) -> OverrideStore:
        """Store for ``~/.config/hypr/{hyprland,conf-overrides}.conf``."""
        try:
            home = home_dir()
        except RuntimeError as e:
            raise NotConfiguredError(
                "Could not determine home directory for the current user"
            ) from e
        return cls(
            home / HYPR_CONFIG_PATH,
            home / HYPR_OVERRIDES_PATH,
            source_ref=f"~/{HYPR_OVERRIDES_PATH}",
        )

    def ensure_exists(self) -> None:
        """Create the override file and source it from hyprland.conf.

        Runs at most once: the include directive is appended only when the
        override file itself is missing.
        """
        if not self.config_path.exists():
            raise NotConfiguredError(
                f"Hyprland configuration file not found at {self.config_path}, "
                "Hyprland is either not installed or not configured"
            )
        if self.overrides_path.exists():
            return

        self.overrides_path.write_text(OVERRIDES_HEADER + "\n", encoding="utf-8")
        log.info("Created override file %s", self.overrides_path)

        with self.config_path.open("a", encoding="utf-8") as f:
            f.write(f"\n{INCLUDE_COMMENT}\nsource = {self._source_ref}\n")
        log.info("Appended include directive to %s", self.config_path)

    def read(self) -> list[str]:
        return read_lines(self.overrides_path)

    def upsert(self, new_line: str) -> list[str]:
        """Replace the line with the same family/key as *new_line*, or append.

        Unclassified lines are always appended.  Returns the written lines.
        """
        lines = self.read()
        replaced = False

        found = classify(new_line)
        if found is not None:
            family, key = found
            if family.replace_on_conflict:
                for i, existing in enumerate(lines):
                    if family.extract_key(existing) == key:
                        lines[i] = new_line
                        replaced = True
                        break

        if not replaced:
            lines.append(new_line)

        write_lines(self.overrides_path, lines)
        log.info("%s override: %s", "Replaced" if replaced else "Appended", new_line)
        return lines

    def upsert_device(self, name: str, layout: str) -> list[str]:
        """Replace the ``device`` block for *name* in place, or append one."""
        lines = self.read()
        block = device_block(name, layout)
        span = find_device_block(lines, name)
        if span is None:
            lines.extend(block)
        else:
            start, end = span
            lines[start:end + 1] = block
        write_lines(self.overrides_path, lines)
        log.info(
            "%s device block for %s: kb_layout = %s",
            "Appended" if span is None else "Replaced", name, layout,
        )
        return lines
