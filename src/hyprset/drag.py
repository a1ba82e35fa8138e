"""Pointer-driven repositioning of monitor boxes on the canvas.

A session is either idle or dragging one box.  Pointer moves shift the
dragged box in canvas space; the transform stays frozen until the monitor
set is reloaded.  On release, a movement beyond DRAG_THRESHOLD commits a
new real position, anything less counts as a click and toggles the
selection.  The anchor monitor at (0, 0) can be clicked but never dragged.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from .layout import CanvasTransform, VisualBox, layout_monitors
from .models import MonitorInfo

log = logging.getLogger(__name__)

# Canvas pixels of movement that turn a click into a drag
DRAG_THRESHOLD = 1.0


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class ReleaseResult(Enum):
    NONE = "none"           # released over nothing
    CLICKED = "clicked"     # selection toggled
    MOVED = "moved"         # new position committed


CommitCallback = Callable[[int, MonitorInfo], None]


class DragSession:
    """Drag/click state machine over the visual boxes of a monitor set."""

    def __init__(
        self,
        monitors: list[MonitorInfo] | None = None,
        on_commit: CommitCallback | None = None,
    ) -> None:
        self._on_commit = on_commit
        self.state = DragState.IDLE
        self.selected_index: int | None = None
        self.transform = CanvasTransform()
        self.boxes: list[VisualBox] = []

        self._index: int | None = None         # box under the last press
        self._last_pointer: tuple[float, float] = (0.0, 0.0)
        self._start_visual: tuple[float, float] = (0.0, 0.0)
        self._delta: tuple[float, float] = (0.0, 0.0)
        self._did_drag = False

        self.set_monitors(monitors or [])

    # ── Monitor set ──────────────────────────────────────────────────

    def set_monitors(self, monitors: list[MonitorInfo]) -> None:
        """Recompute the transform and boxes for a fresh monitor set."""
        if self.state is DragState.DRAGGING:
            self.cancel()
        self.transform, self.boxes = layout_monitors(monitors)
        if self.selected_index is not None and self.selected_index >= len(self.boxes):
            self.selected_index = None

    @property
    def monitors(self) -> list[MonitorInfo]:
        return [b.monitor for b in self.boxes]

    @property
    def dragging_index(self) -> int | None:
        return self._index if self.state is DragState.DRAGGING else None

    @property
    def did_drag(self) -> bool:
        return self._did_drag

    def hit_test(self, x: float, y: float) -> int | None:
        """Index of the topmost box at canvas point (x, y)."""
        for i in range(len(self.boxes) - 1, -1, -1):
            if self.boxes[i].contains(x, y):
                return i
        return None

    # ── Pointer events ───────────────────────────────────────────────

    def press(self, x: float, y: float) -> bool:
        """Pointer pressed; returns True if a drag started."""
        if self.state is DragState.DRAGGING:
            return False
        self._index = self.hit_test(x, y)
        self._delta = (0.0, 0.0)
        self._did_drag = False
        if self._index is None:
            return False

        box = self.boxes[self._index]
        if box.monitor.is_anchor:
            return False

        self.state = DragState.DRAGGING
        self._last_pointer = (x, y)
        self._start_visual = (box.visual_x, box.visual_y)
        return True

    def move(self, x: float, y: float) -> None:
        """Pointer moved; shifts the dragged box by the pointer delta."""
        if self.state is not DragState.DRAGGING or self._index is None:
            return
        dx = x - self._last_pointer[0]
        dy = y - self._last_pointer[1]
        self._last_pointer = (x, y)

        box = self.boxes[self._index]
        box.visual_x += dx
        box.visual_y += dy

        total_x = self._delta[0] + dx
        total_y = self._delta[1] + dy
        self._delta = (total_x, total_y)
        if abs(total_x) > DRAG_THRESHOLD or abs(total_y) > DRAG_THRESHOLD:
            self._did_drag = True

    def release(self) -> ReleaseResult:
        """Pointer released: commit a drag or toggle the selection."""
        index = self._index
        dragging = self.state is DragState.DRAGGING
        did_drag = self._did_drag

        self.state = DragState.IDLE
        self._index = None
        self._did_drag = False

        if index is None:
            return ReleaseResult.NONE

        if dragging and did_drag:
            self._commit(index)
            return ReleaseResult.MOVED

        if dragging:
            # Sub-threshold jitter: put the box back where it was
            box = self.boxes[index]
            box.visual_x, box.visual_y = self._start_visual

        self.selected_index = None if self.selected_index == index else index
        return ReleaseResult.CLICKED

    def cancel(self) -> None:
        """Abort an active drag, restoring the box's position."""
        if self.state is DragState.DRAGGING and self._index is not None:
            box = self.boxes[self._index]
            box.visual_x, box.visual_y = self._start_visual
        self.state = DragState.IDLE
        self._index = None
        self._did_drag = False

    def _commit(self, index: int) -> None:
        box = self.boxes[index]
        monitor = box.monitor
        monitor.position = self.transform.to_real(box.visual_x, box.visual_y)
        log.info("Moved %s to %dx%d", monitor.name, *monitor.position)
        if self._on_commit is not None:
            self._on_commit(index, monitor)
