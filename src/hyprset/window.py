"""Main application window."""

from __future__ import annotations

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Gtk, Adw, Gio

from .canvas import MonitorCanvas
from .controller import SettingsController
from .drag import DragSession
from .panels import InputPanel, MonitorPanel


class MainWindow(Adw.ApplicationWindow):
    """Monitor layout canvas with monitor and input settings."""

    def __init__(self, app: Adw.Application, controller: SettingsController) -> None:
        super().__init__(application=app)
        self._controller = controller
        self._session = DragSession(on_commit=controller.commit_drag)

        self.set_title("hyprset")
        self.set_default_size(960, 640)

        self._build_ui()
        self._setup_actions()
        self._load_monitors()

    def _build_ui(self) -> None:
        main_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.set_content(main_box)

        header = Adw.HeaderBar()
        btn_detect = Gtk.Button(icon_name="view-refresh-symbolic", tooltip_text="Detect monitors")
        btn_detect.connect("clicked", lambda *_: self._load_monitors())
        header.pack_end(btn_detect)
        main_box.append(header)

        self._toast_overlay = Adw.ToastOverlay()
        self._toast_overlay.set_vexpand(True)
        main_box.append(self._toast_overlay)

        stack = Adw.ViewStack()
        switcher = Adw.ViewSwitcher(stack=stack, policy=Adw.ViewSwitcherPolicy.WIDE)
        header.set_title_widget(switcher)
        self._toast_overlay.set_child(stack)

        # Displays: canvas + monitor panel
        displays = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=12)
        displays.set_margin_start(12)
        displays.set_margin_end(12)
        displays.set_margin_top(12)
        displays.set_margin_bottom(12)

        canvas_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        hint = Gtk.Label(
            label="Drag secondary monitors to position them. "
                  "The primary monitor is fixed at 0x0.",
            xalign=0, wrap=True,
        )
        hint.add_css_class("dim-label")
        canvas_box.append(hint)

        self._canvas = MonitorCanvas(self._session)
        self._canvas.set_halign(Gtk.Align.START)
        self._canvas.set_valign(Gtk.Align.START)
        self._canvas.connect("monitor-selected", self._on_monitor_selected)
        self._canvas.connect("monitor-moved", self._on_monitor_moved)
        canvas_box.append(self._canvas)

        self._lbl_scale = Gtk.Label(xalign=0)
        self._lbl_scale.add_css_class("dim-label")
        canvas_box.append(self._lbl_scale)
        displays.append(canvas_box)

        self._monitor_panel = MonitorPanel()
        self._monitor_panel.set_hexpand(True)
        self._monitor_panel.connect("apply-requested", self._on_monitor_apply)
        displays.append(self._monitor_panel)

        stack.add_titled_with_icon(displays, "displays", "Displays", "video-display-symbolic")

        # Input
        self._input_panel = InputPanel(
            locales=self._controller.available_locales(),
            selected=self._controller.current_locales(),
            sensitivity=self._controller.current_sensitivity(),
            force_no_accel=self._controller.current_force_no_accel(),
        )
        self._input_panel.connect("keyboard-apply-requested", self._on_keyboard_apply)
        self._input_panel.connect("mouse-apply-requested", self._on_mouse_apply)
        stack.add_titled_with_icon(
            self._input_panel, "input", "Input", "input-keyboard-symbolic",
        )

    def _setup_actions(self) -> None:
        """Set up keyboard shortcuts."""
        action_detect = Gio.SimpleAction(name="detect")
        action_detect.connect("activate", lambda *_: self._load_monitors())
        self.add_action(action_detect)

        app = self.get_application()
        app.set_accels_for_action("win.detect", ["<Control>r"])

    def _toast(self, message: str) -> None:
        self._toast_overlay.add_toast(Adw.Toast(title=message, timeout=2))

    def _load_monitors(self) -> None:
        monitors = self._controller.load_monitors()
        self._session.selected_index = None
        self._canvas.set_monitors(monitors)
        self._monitor_panel.set_monitor(None)
        self._lbl_scale.set_label(f"Scale factor: {self._session.transform.scale_factor:.4f}")
        if not monitors:
            self._toast("No monitors detected")

    # ── Signal handlers ──────────────────────────────────────────────

    def _selected_monitor(self):
        idx = self._session.selected_index
        if idx is None:
            return None
        return self._session.monitors[idx]

    def _on_monitor_selected(self, _canvas: MonitorCanvas, index: int) -> None:
        self._monitor_panel.set_monitor(self._selected_monitor() if index >= 0 else None)

    def _on_monitor_moved(self, _canvas: MonitorCanvas, index: int) -> None:
        m = self._session.monitors[index]
        x, y = m.position
        self._toast(f"{m.name} moved to {x}x{y}")
        if self._session.selected_index == index:
            self._monitor_panel.set_monitor(m)

    def _on_monitor_apply(self, _panel: MonitorPanel, resolution: str, rate: float) -> None:
        monitor = self._selected_monitor()
        if monitor is None:
            return
        saved = self._controller.apply_monitor(monitor, resolution=resolution, refresh_rate=rate)
        # Footprint may have changed; relayout
        selected = self._session.selected_index
        self._canvas.set_monitors(self._session.monitors)
        self._session.selected_index = selected
        if saved:
            self._toast(f"Applied {resolution} @ {rate:g}Hz to {monitor.name}")
        else:
            self._toast(f"Applied {resolution} @ {rate:g}Hz to {monitor.name}, but saving failed")

    def _on_keyboard_apply(self, panel: InputPanel) -> None:
        if self._controller.apply_locales(panel.selected_locales):
            self._toast("Keyboard layouts saved")
        else:
            self._toast("Failed to save keyboard layouts")

    def _on_mouse_apply(self, panel: InputPanel) -> None:
        if self._controller.apply_mouse(panel.sensitivity, panel.force_no_accel):
            self._toast("Mouse settings saved")
        else:
            self._toast("Failed to save mouse settings")
