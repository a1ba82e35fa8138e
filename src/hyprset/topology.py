"""Parser for the text output of ``hyprctl monitors all``.

Each monitor is a block like::

    Monitor DP-3 (ID 0):
    	2560x1440@155.00000 at 0x0
    	description: AOC Q27G2SG4 XFXP8HA003779
    	availableModes: 2560x1440@59.95Hz 2560x1440@155.00Hz

The format is free text and drifts between Hyprland releases, so parsing
is best-effort: unusable fields keep their defaults and nothing raises.
"""

from __future__ import annotations

import logging

from .catalog import parse_modes
from .models import MonitorInfo

log = logging.getLogger(__name__)

_HEADER = "Monitor "
_ID_OPEN = "(ID "
_ID_CLOSE = "):"
_MODES = "availableModes:"


def _parse_header(line: str) -> MonitorInfo | None:
    """Open a monitor from ``Monitor NAME (ID N):``, or None if malformed."""
    rest = line[len(_HEADER):]
    id_start = rest.find(_ID_OPEN)
    if id_start == -1:
        return None
    id_end = rest.find(_ID_CLOSE, id_start)
    if id_end == -1:
        return None
    try:
        monitor_id = int(rest[id_start + len(_ID_OPEN):id_end])
    except ValueError:
        return None
    return MonitorInfo(id=monitor_id, name=rest[:id_start].strip())


def _parse_current_mode(monitor: MonitorInfo, line: str) -> None:
    """Apply ``WxH@R at XxY`` to *monitor*, field by field."""
    mode_part, _, pos_part = line.partition(" at ")

    resolution, sep, rate_str = mode_part.partition("@")
    if sep:
        monitor.current_resolution = resolution.strip()
        try:
            monitor.current_refresh_rate = float(rate_str)
        except ValueError:
            pass

    x_str, sep, y_str = pos_part.partition("x")
    if sep:
        try:
            monitor.position = (int(x_str), int(y_str))
        except ValueError:
            pass


def parse_monitors(output: str) -> list[MonitorInfo]:
    """Parse monitor blocks in the order they appear."""
    monitors: list[MonitorInfo] = []
    current: MonitorInfo | None = None

    for raw in output.splitlines():
        line = raw.strip()

        if line.startswith(_HEADER):
            if current is not None:
                monitors.append(current)
            current = _parse_header(line)
            if current is None:
                log.debug("Ignoring malformed monitor header %r", line)
            continue

        if current is None:
            continue

        if "@" in line and " at " in line:
            _parse_current_mode(current, line)
        elif line.startswith(_MODES):
            current.available_modes.extend(parse_modes(line[len(_MODES):]))

    if current is not None:
        monitors.append(current)

    return monitors
