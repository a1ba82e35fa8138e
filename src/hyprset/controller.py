"""Glue between the UI, the override file and Hyprland IPC.

Failures here never propagate to the UI: IPC errors fall back to default
values and I/O errors are logged, leaving the in-memory state as-is.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .catalog import (
    DEFAULT_LOCALES,
    is_physical_keyboard,
    load_locale_catalog,
)
from .hyprland import HyprctlError, HyprlandIPC
from .models import LocaleInfo, MonitorInfo
from .overrides import (
    OverrideStore,
    force_no_accel_override,
    join_layout_codes,
    locale_override,
    sensitivity_override,
)
from .utils import XKB_BASE_LST, load_app_settings

log = logging.getLogger(__name__)


class SettingsController:
    """Reads current settings and commits user changes."""

    def __init__(
        self,
        store: OverrideStore,
        ipc: HyprlandIPC,
        settings: dict | None = None,
    ) -> None:
        self._store = store
        self._ipc = ipc
        self._settings = settings if settings is not None else load_app_settings()

    @property
    def per_device_layouts(self) -> bool:
        return bool(self._settings.get("per_device_layouts", False))

    def _default_locales(self) -> list[str]:
        return list(self._settings.get("default_locales", DEFAULT_LOCALES))

    # ── Reading ──────────────────────────────────────────────────────

    def load_monitors(self) -> list[MonitorInfo]:
        try:
            return self._ipc.get_monitors()
        except HyprctlError as e:
            log.warning("Failed to query monitors: %s", e)
            return []

    def available_locales(self) -> list[LocaleInfo]:
        path = self._settings.get("locale_catalog", XKB_BASE_LST)
        try:
            return load_locale_catalog(path)
        except OSError as e:
            log.warning("Failed to read layout catalog %s: %s", path, e)
            return []

    def current_locales(self) -> list[str]:
        default = self._default_locales()
        try:
            codes = self._ipc.get_current_locales()
        except HyprctlError as e:
            log.warning("Failed to get current locales: %s, using default", e)
            return default
        return codes or default

    def current_sensitivity(self) -> float:
        try:
            return self._ipc.get_sensitivity()
        except HyprctlError as e:
            log.warning("Failed to get mouse sensitivity: %s", e)
            return 0.0

    def current_force_no_accel(self) -> bool:
        try:
            return self._ipc.get_force_no_accel()
        except HyprctlError as e:
            log.warning("Failed to get force_no_accel: %s", e)
            return False

    # ── Writing ──────────────────────────────────────────────────────

    def _write(self, line: str) -> bool:
        try:
            self._store.upsert(line)
        except OSError as e:
            log.error("Failed to write override %r: %s", line, e)
            return False
        return True

    def apply_monitor(
        self,
        monitor: MonitorInfo,
        resolution: str | None = None,
        refresh_rate: float | None = None,
        position: tuple[int, int] | None = None,
    ) -> bool:
        """Update *monitor*, persist its override line and apply it live.

        Returns False if the override line could not be saved.
        """
        if resolution is not None:
            monitor.current_resolution = resolution
        if refresh_rate is not None:
            monitor.current_refresh_rate = refresh_rate
        if position is not None:
            monitor.position = position

        saved = self._write(monitor.to_override_line())

        log.info("Applying monitor config via IPC: %s", monitor.to_keyword_value())
        try:
            self._ipc.apply_monitor(monitor)
        except HyprctlError as e:
            log.warning("Failed to apply monitor config: %s", e)
        return saved

    def commit_drag(self, index: int, monitor: MonitorInfo) -> None:
        """DragSession commit callback."""
        self.apply_monitor(monitor)

    def apply_locales(self, codes: Iterable[str]) -> bool:
        codes = list(codes)
        if not join_layout_codes(codes):
            codes = self._default_locales()
            log.info("No keyboard layouts selected, using default %s", codes)

        if not self.per_device_layouts:
            return self._write(locale_override(codes))

        try:
            keyboards = self._ipc.get_keyboards()
        except HyprctlError as e:
            log.warning("Failed to list keyboards: %s", e)
            keyboards = []
        targets = [kb for kb in keyboards if is_physical_keyboard(kb.name)]
        if not targets:
            log.info("No physical keyboards found, writing global layout")
            return self._write(locale_override(codes))
        results = [self.apply_device_layout(kb.name, codes) for kb in targets]
        return all(results)

    def apply_device_layout(self, name: str, codes: Iterable[str]) -> bool:
        layout = join_layout_codes(codes) or join_layout_codes(self._default_locales())
        try:
            self._store.upsert_device(name, layout)
        except OSError as e:
            log.error("Failed to write device layout for %s: %s", name, e)
            return False
        return True

    def apply_mouse(self, sensitivity: float, force_no_accel: bool) -> bool:
        saved = self._write(sensitivity_override(sensitivity))
        return self._write(force_no_accel_override(force_no_accel)) and saved
