"""Data models: Mode, MonitorInfo, LocaleInfo, Keyboard."""

from __future__ import annotations

from dataclasses import dataclass, field

from .overrides import monitor_keyword_value, monitor_override


# Footprint assumed for monitors whose resolution string is unusable
FALLBACK_SIZE = (1920, 1080)


def parse_resolution(resolution: str) -> tuple[int, int]:
    """Parse ``"WxH"`` into ``(width, height)``, falling back per axis."""
    w_str, sep, h_str = resolution.partition("x")
    if not sep:
        return FALLBACK_SIZE
    try:
        width = int(w_str)
    except ValueError:
        width = FALLBACK_SIZE[0]
    try:
        height = int(h_str)
    except ValueError:
        height = FALLBACK_SIZE[1]
    # A zero-sized footprint would collapse the canvas transform
    if width <= 0:
        width = FALLBACK_SIZE[0]
    if height <= 0:
        height = FALLBACK_SIZE[1]
    return width, height


# ── Mode ─────────────────────────────────────────────────────────────────

@dataclass
class Mode:
    resolution: str = ""        # e.g. "2560x1440"
    refresh_rate: float = 0.0


# ── MonitorInfo ──────────────────────────────────────────────────────────

@dataclass
class MonitorInfo:
    # Identity (from hyprctl monitors all)
    id: int = 0
    name: str = ""              # e.g. "DP-3", "HDMI-A-1"

    # Current mode
    current_resolution: str = ""
    current_refresh_rate: float = 0.0

    # Position in Hyprland's global layout; the anchor sits at (0, 0)
    position: tuple[int, int] = (0, 0)

    # Available modes from hardware, in source order (duplicates kept)
    available_modes: list[Mode] = field(default_factory=list)

    @property
    def size(self) -> tuple[int, int]:
        """Real pixel footprint from the current resolution."""
        return parse_resolution(self.current_resolution)

    @property
    def is_anchor(self) -> bool:
        """True for the primary monitor, which is fixed at (0, 0)."""
        return tuple(self.position) == (0, 0)

    def unique_resolutions(self) -> list[str]:
        from .catalog import unique_resolutions
        return unique_resolutions(self.available_modes)

    def refresh_rates_for(self, resolution: str) -> list[float]:
        from .catalog import refresh_rates_for
        return refresh_rates_for(self.available_modes, resolution)

    def to_override_line(self) -> str:
        """Generate the ``monitor=...`` line for the override file."""
        return monitor_override(
            self.name, self.current_resolution, self.current_refresh_rate, self.position,
        )

    def to_keyword_value(self) -> str:
        """Value for a live ``keyword monitor`` command."""
        return monitor_keyword_value(
            self.name, self.current_resolution, self.current_refresh_rate, self.position,
        )


# ── Keyboard layouts ─────────────────────────────────────────────────────

@dataclass
class LocaleInfo:
    code: str = ""              # e.g. "fi"
    label: str = ""             # e.g. "Finnish"


@dataclass
class Keyboard:
    name: str = ""
    layout: str = ""            # comma-separated codes, e.g. "us,fi"

    @property
    def layout_codes(self) -> list[str]:
        codes: list[str] = []
        for code in self.layout.split(","):
            code = code.strip()
            if code and code not in codes:
                codes.append(code)
        return codes
