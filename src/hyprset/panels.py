"""Side panels: selected monitor settings and input devices."""

from __future__ import annotations

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Gtk, Adw, GObject

from .catalog import format_rate, parse_rate_label
from .models import LocaleInfo, MonitorInfo


class MonitorPanel(Adw.PreferencesPage):
    """Mode selection for the selected monitor."""

    __gtype_name__ = "HyprsetMonitorPanel"

    __gsignals__ = {
        # resolution, refresh rate
        "apply-requested": (GObject.SignalFlags.RUN_FIRST, None, (str, float)),
    }

    def __init__(self) -> None:
        super().__init__()
        self._monitor: MonitorInfo | None = None
        self._resolutions: list[str] = []
        self._rates: list[str] = []
        self._building = False

        self._build_ui()
        self.set_monitor(None)

    def _build_ui(self) -> None:
        grp_info = Adw.PreferencesGroup(title="Monitor")
        self.add(grp_info)

        self._row_name = Adw.ActionRow(title="Name", icon_name="video-display-symbolic")
        self._lbl_name = Gtk.Label(label="—", xalign=1)
        self._lbl_name.add_css_class("dim-label")
        self._row_name.add_suffix(self._lbl_name)
        grp_info.add(self._row_name)

        self._row_pos = Adw.ActionRow(title="Position", icon_name="view-grid-symbolic")
        self._lbl_pos = Gtk.Label(label="—", xalign=1)
        self._lbl_pos.add_css_class("dim-label")
        self._row_pos.add_suffix(self._lbl_pos)
        grp_info.add(self._row_pos)

        grp_mode = Adw.PreferencesGroup(title="Mode")
        self.add(grp_mode)

        self._combo_resolution = Adw.ComboRow(
            title="Resolution", icon_name="preferences-desktop-display-symbolic",
        )
        self._combo_resolution.connect("notify::selected", self._on_resolution_changed)
        grp_mode.add(self._combo_resolution)

        self._combo_refresh = Adw.ComboRow(title="Refresh Rate")
        grp_mode.add(self._combo_refresh)

        self._btn_apply = Gtk.Button(label="Apply Configuration", halign=Gtk.Align.CENTER)
        self._btn_apply.add_css_class("suggested-action")
        self._btn_apply.add_css_class("pill")
        self._btn_apply.set_margin_top(12)
        self._btn_apply.connect("clicked", self._on_apply_clicked)
        grp_mode.add(self._btn_apply)

    def set_monitor(self, monitor: MonitorInfo | None) -> None:
        self._monitor = monitor
        self._building = True
        try:
            if monitor is None:
                self._lbl_name.set_label("—")
                self._lbl_pos.set_label("—")
                self._resolutions = []
                self._combo_resolution.set_model(Gtk.StringList.new([]))
                self._set_rates([], None)
                self.set_sensitive(False)
                return

            self.set_sensitive(True)
            title = f"{monitor.name} (ID: {monitor.id})"
            if monitor.is_anchor:
                title += " (primary)"
            self._lbl_name.set_label(title)
            x, y = monitor.position
            self._lbl_pos.set_label(f"{x}x{y}")

            self._resolutions = monitor.unique_resolutions()
            self._combo_resolution.set_model(Gtk.StringList.new(self._resolutions))
            if monitor.current_resolution in self._resolutions:
                self._combo_resolution.set_selected(
                    self._resolutions.index(monitor.current_resolution)
                )
            self._set_rates(
                monitor.refresh_rates_for(monitor.current_resolution),
                monitor.current_refresh_rate,
            )
        finally:
            self._building = False

    def _set_rates(self, rates: list[float], current: float | None) -> None:
        self._rates = [format_rate(r) for r in rates]
        self._combo_refresh.set_model(Gtk.StringList.new(self._rates))
        if current is not None and format_rate(current) in self._rates:
            self._combo_refresh.set_selected(self._rates.index(format_rate(current)))

    def _selected_resolution(self) -> str | None:
        idx = self._combo_resolution.get_selected()
        if idx == Gtk.INVALID_LIST_POSITION or idx >= len(self._resolutions):
            return None
        return self._resolutions[idx]

    def _on_resolution_changed(self, *_args) -> None:
        if self._building or self._monitor is None:
            return
        res = self._selected_resolution()
        if res is not None:
            self._set_rates(self._monitor.refresh_rates_for(res), None)

    def _on_apply_clicked(self, _btn: Gtk.Button) -> None:
        res = self._selected_resolution()
        idx = self._combo_refresh.get_selected()
        if res is None or idx == Gtk.INVALID_LIST_POSITION or idx >= len(self._rates):
            return
        self.emit("apply-requested", res, parse_rate_label(self._rates[idx]))


class InputPanel(Adw.PreferencesPage):
    """Keyboard layouts and mouse options."""

    __gtype_name__ = "HyprsetInputPanel"

    __gsignals__ = {
        "keyboard-apply-requested": (GObject.SignalFlags.RUN_FIRST, None, ()),
        "mouse-apply-requested": (GObject.SignalFlags.RUN_FIRST, None, ()),
    }

    def __init__(
        self,
        locales: list[LocaleInfo],
        selected: list[str],
        sensitivity: float,
        force_no_accel: bool,
    ) -> None:
        super().__init__()
        self._locales = locales or [LocaleInfo(code=c, label=c) for c in selected]
        self._selected: list[str] = list(selected)
        self._layout_rows: list[Adw.ActionRow] = []

        self._build_keyboard()
        self._build_mouse(sensitivity, force_no_accel)
        self._refresh_layout_rows()

    @property
    def selected_locales(self) -> list[str]:
        return list(self._selected)

    @property
    def sensitivity(self) -> float:
        return round(self._scale_sens.get_value(), 2)

    @property
    def force_no_accel(self) -> bool:
        return self._sw_no_accel.get_active()

    def _build_keyboard(self) -> None:
        self._grp_kb = Adw.PreferencesGroup(title="Keyboard Layouts")
        self.add(self._grp_kb)

        self._combo_locale = Adw.ComboRow(title="Add Layout", icon_name="input-keyboard-symbolic")
        labels = [f"{loc.label} ({loc.code})" for loc in self._locales]
        self._combo_locale.set_model(Gtk.StringList.new(labels))
        self._combo_locale.set_enable_search(True)
        btn_add = Gtk.Button(icon_name="list-add-symbolic", valign=Gtk.Align.CENTER)
        btn_add.add_css_class("flat")
        btn_add.connect("clicked", self._on_add_locale)
        self._combo_locale.add_suffix(btn_add)
        self._grp_kb.add(self._combo_locale)

        btn_apply = Gtk.Button(label="Apply Layouts", halign=Gtk.Align.END)
        btn_apply.add_css_class("suggested-action")
        btn_apply.connect("clicked", lambda *_: self.emit("keyboard-apply-requested"))
        self._grp_kb.set_header_suffix(btn_apply)

    def _build_mouse(self, sensitivity: float, force_no_accel: bool) -> None:
        grp = Adw.PreferencesGroup(title="Mouse")
        self.add(grp)

        row_sens = Adw.ActionRow(title="Sensitivity", subtitle="-1.0 to 1.0")
        self._scale_sens = Gtk.Scale.new_with_range(Gtk.Orientation.HORIZONTAL, -1.0, 1.0, 0.05)
        self._scale_sens.set_value(sensitivity)
        self._scale_sens.set_draw_value(True)
        self._scale_sens.set_digits(2)
        self._scale_sens.set_hexpand(True)
        row_sens.add_suffix(self._scale_sens)
        grp.add(row_sens)

        self._sw_no_accel = Adw.SwitchRow(title="Disable Acceleration")
        self._sw_no_accel.set_active(force_no_accel)
        grp.add(self._sw_no_accel)

        btn_apply = Gtk.Button(label="Apply Mouse", halign=Gtk.Align.END)
        btn_apply.add_css_class("suggested-action")
        btn_apply.connect("clicked", lambda *_: self.emit("mouse-apply-requested"))
        grp.set_header_suffix(btn_apply)

    def _refresh_layout_rows(self) -> None:
        for row in self._layout_rows:
            self._grp_kb.remove(row)
        self._layout_rows = []

        labels = {loc.code: loc.label for loc in self._locales}
        for code in self._selected:
            row = Adw.ActionRow(title=labels.get(code, code), subtitle=code)
            btn = Gtk.Button(icon_name="edit-delete-symbolic", valign=Gtk.Align.CENTER)
            btn.add_css_class("flat")
            btn.connect("clicked", self._on_remove_locale, code)
            # At least one layout must stay selected
            btn.set_sensitive(len(self._selected) > 1)
            row.add_suffix(btn)
            self._grp_kb.add(row)
            self._layout_rows.append(row)

    def _on_add_locale(self, _btn: Gtk.Button) -> None:
        idx = self._combo_locale.get_selected()
        if idx == Gtk.INVALID_LIST_POSITION or idx >= len(self._locales):
            return
        code = self._locales[idx].code
        if code not in self._selected:
            self._selected.append(code)
            self._refresh_layout_rows()

    def _on_remove_locale(self, _btn: Gtk.Button, code: str) -> None:
        if code in self._selected:
            self._selected.remove(code)
            self._refresh_layout_rows()
