"""Monitor layout canvas using Gtk.DrawingArea + Cairo."""

from __future__ import annotations

import math

import gi
gi.require_version("Gtk", "4.0")
from gi.repository import Gtk, GObject

from .drag import DragSession, ReleaseResult
from .layout import VisualBox
from .models import MonitorInfo


# Colors
COLOR_BG = (0.12, 0.12, 0.14)
COLOR_MONITOR = (0.23, 0.26, 0.32)
COLOR_MONITOR_BORDER = (0.30, 0.34, 0.42)
COLOR_ANCHOR = (0.29, 0.49, 0.35)
COLOR_ANCHOR_BORDER = (0.37, 0.55, 0.44)
COLOR_DRAGGING = (0.53, 0.75, 0.82)
COLOR_SELECTED = (0.26, 0.52, 0.96)
COLOR_TEXT = (0.9, 0.9, 0.92)
COLOR_TEXT_DIM = (0.6, 0.62, 0.64)


class MonitorCanvas(Gtk.DrawingArea):
    """Canvas widget for repositioning monitors with drag-and-drop."""

    __gtype_name__ = "HyprsetMonitorCanvas"

    __gsignals__ = {
        # -1 when the selection is cleared
        "monitor-selected": (GObject.SignalFlags.RUN_FIRST, None, (int,)),
        "monitor-moved": (GObject.SignalFlags.RUN_FIRST, None, (int,)),
    }

    def __init__(self, session: DragSession) -> None:
        super().__init__()
        self._session = session
        self._press_x: float = 0
        self._press_y: float = 0

        self.set_draw_func(self._draw)
        self._update_size()

        drag = Gtk.GestureDrag()
        drag.set_button(1)
        drag.connect("drag-begin", self._on_drag_begin)
        drag.connect("drag-update", self._on_drag_update)
        drag.connect("drag-end", self._on_drag_end)
        self.add_controller(drag)

    @property
    def session(self) -> DragSession:
        return self._session

    def set_monitors(self, monitors: list[MonitorInfo]) -> None:
        self._session.set_monitors(monitors)
        self._update_size()
        self.queue_draw()

    def _update_size(self) -> None:
        t = self._session.transform
        self.set_content_width(math.ceil(t.canvas_width))
        self.set_content_height(math.ceil(t.canvas_height))

    # ── Event handlers ───────────────────────────────────────────────

    def _on_drag_begin(self, gesture: Gtk.GestureDrag, x: float, y: float) -> None:
        self._press_x = x
        self._press_y = y
        self._session.press(x, y)
        self.queue_draw()

    def _on_drag_update(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        self._session.move(self._press_x + offset_x, self._press_y + offset_y)
        self.queue_draw()

    def _on_drag_end(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        index = self._session.dragging_index
        if index is None:
            index = self._session.hit_test(self._press_x, self._press_y)
        result = self._session.release()
        if result is ReleaseResult.MOVED and index is not None:
            self.emit("monitor-moved", index)
        elif result is ReleaseResult.CLICKED:
            selected = self._session.selected_index
            self.emit("monitor-selected", -1 if selected is None else selected)
        self.queue_draw()

    # ── Drawing ──────────────────────────────────────────────────────

    def _draw(self, area: Gtk.DrawingArea, cr, width: int, height: int) -> None:
        cr.set_source_rgb(*COLOR_BG)
        cr.paint()

        dragging = self._session.dragging_index
        for i, box in enumerate(self._session.boxes):
            self._draw_box(cr, box, i == self._session.selected_index, i == dragging)

    def _draw_box(self, cr, box: VisualBox, selected: bool, dragging: bool) -> None:
        anchor = box.monitor.is_anchor
        x, y = box.visual_x, box.visual_y
        w, h = box.visual_width, box.visual_height

        cr.set_source_rgb(*(COLOR_ANCHOR if anchor else COLOR_MONITOR))
        _rounded_rect(cr, x, y, w, h, 4)
        cr.fill()

        if dragging:
            cr.set_source_rgb(*COLOR_DRAGGING)
            cr.set_line_width(2.5)
        elif selected:
            cr.set_source_rgb(*COLOR_SELECTED)
            cr.set_line_width(2.5)
        else:
            cr.set_source_rgb(*(COLOR_ANCHOR_BORDER if anchor else COLOR_MONITOR_BORDER))
            cr.set_line_width(1.0)
        _rounded_rect(cr, x, y, w, h, 4)
        cr.stroke()

        if w > 40 and h > 20:
            self._draw_box_text(cr, box)

    def _draw_box_text(self, cr, box: VisualBox) -> None:
        m = box.monitor
        x, y = box.visual_x, box.visual_y
        w, h = box.visual_width, box.visual_height

        lines = [(m.name or "?", COLOR_TEXT, min(14, max(8, w / 10)))]
        small = min(10, max(6, w / 14))
        lines.append((f"ID: {m.id}", COLOR_TEXT_DIM, small))
        lines.append((m.current_resolution, COLOR_TEXT_DIM, small))
        if m.is_anchor:
            lines.append(("PRIMARY", COLOR_TEXT, small))

        ty = y + h / 2 - sum(size + 2 for _, _, size in lines) / 2
        for text, color, size in lines:
            ty += size + 2
            if ty + 2 > y + h:
                break
            cr.set_source_rgb(*color)
            cr.set_font_size(size)
            extents = cr.text_extents(text)
            cr.move_to(x + (w - extents.width) / 2, ty)
            cr.show_text(text)


def _rounded_rect(cr, x: float, y: float, w: float, h: float, r: float) -> None:
    """Draw a rounded rectangle path."""
    cr.new_sub_path()
    cr.arc(x + w - r, y + r, r, -math.pi / 2, 0)
    cr.arc(x + w - r, y + h - r, r, 0, math.pi / 2)
    cr.arc(x + r, y + h - r, r, math.pi / 2, math.pi)
    cr.arc(x + r, y + r, r, math.pi, 3 * math.pi / 2)
    cr.close_path()
