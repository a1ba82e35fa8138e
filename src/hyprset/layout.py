"""Mapping between Hyprland layout coordinates and the visual canvas."""

from __future__ import annotations

from dataclasses import dataclass

from .models import MonitorInfo


# Padding around the layout, in real pixels before OVERALL_SCALE
PADDING = 40.0
MIN_CANVAS_WIDTH = 600.0
MIN_CANVAS_HEIGHT = 400.0
# Uniform shrink so large multi-monitor rigs fit in a small widget
OVERALL_SCALE = 0.25
# Upper bound on the real → visual scale factor
MAX_ZOOM = 0.3 * OVERALL_SCALE


@dataclass
class VisualBox:
    """On-canvas rectangle of one monitor. Never persisted."""

    monitor: MonitorInfo
    visual_x: float
    visual_y: float
    visual_width: float
    visual_height: float

    def contains(self, x: float, y: float) -> bool:
        return (self.visual_x <= x <= self.visual_x + self.visual_width and
                self.visual_y <= y <= self.visual_y + self.visual_height)


@dataclass(frozen=True)
class CanvasTransform:
    scale_factor: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    canvas_width: float = MIN_CANVAS_WIDTH
    canvas_height: float = MIN_CANVAS_HEIGHT

    @classmethod
    def fit(cls, monitors: list[MonitorInfo]) -> CanvasTransform:
        """Fit all monitors into a padded, centered canvas."""
        if not monitors:
            return cls()

        min_x = min(m.position[0] for m in monitors)
        min_y = min(m.position[1] for m in monitors)
        max_x = max(m.position[0] + m.size[0] for m in monitors)
        max_y = max(m.position[1] + m.size[1] for m in monitors)

        total_width = float(max_x - min_x)
        total_height = float(max_y - min_y)

        canvas_width = max(
            (total_width + 2 * PADDING) * OVERALL_SCALE,
            MIN_CANVAS_WIDTH * OVERALL_SCALE,
        )
        canvas_height = max(
            (total_height + 2 * PADDING) * OVERALL_SCALE,
            MIN_CANVAS_HEIGHT * OVERALL_SCALE,
        )

        pad = 2 * PADDING * OVERALL_SCALE
        scale = min(
            (canvas_width - pad) / total_width,
            (canvas_height - pad) / total_height,
            MAX_ZOOM,
        )

        offset_x = (canvas_width - total_width * scale) / 2 - min_x * scale
        offset_y = (canvas_height - total_height * scale) / 2 - min_y * scale

        return cls(
            scale_factor=scale,
            offset_x=offset_x,
            offset_y=offset_y,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
        )

    def to_visual(self, x: float, y: float) -> tuple[float, float]:
        """Convert real layout coordinates to canvas coordinates."""
        return (x * self.scale_factor + self.offset_x,
                y * self.scale_factor + self.offset_y)

    def to_real(self, vx: float, vy: float) -> tuple[int, int]:
        """Convert canvas coordinates to the nearest real position."""
        return (round((vx - self.offset_x) / self.scale_factor),
                round((vy - self.offset_y) / self.scale_factor))

    def box_for(self, monitor: MonitorInfo) -> VisualBox:
        vx, vy = self.to_visual(*monitor.position)
        width, height = monitor.size
        return VisualBox(
            monitor=monitor,
            visual_x=vx,
            visual_y=vy,
            visual_width=width * self.scale_factor,
            visual_height=height * self.scale_factor,
        )

    def boxes(self, monitors: list[MonitorInfo]) -> list[VisualBox]:
        return [self.box_for(m) for m in monitors]


def layout_monitors(monitors: list[MonitorInfo]) -> tuple[CanvasTransform, list[VisualBox]]:
    """Compute the transform for *monitors* and their visual boxes."""
    transform = CanvasTransform.fit(monitors)
    return transform, transform.boxes(monitors)
