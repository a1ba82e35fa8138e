"""Application entry point."""

from __future__ import annotations

import logging
import sys

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio

from .controller import SettingsController
from .hyprland import HyprlandIPC
from .overrides import NotConfiguredError, OverrideStore
from .utils import APP_ID

log = logging.getLogger(__name__)


class SettingsApp(Adw.Application):
    """Main application class."""

    def __init__(self, controller: SettingsController) -> None:
        super().__init__(
            application_id=APP_ID,
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS,
        )
        self._controller = controller

    def do_activate(self) -> None:
        win = self.get_active_window()
        if win is None:
            from .window import MainWindow
            win = MainWindow(self, self._controller)
        win.present()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [hyprset] %(levelname)s %(message)s",
    )

    try:
        store = OverrideStore.default()
        store.ensure_exists()
    except NotConfiguredError as e:
        log.error("%s", e)
        sys.exit(1)
    except OSError as e:
        log.error("Failed to create Hyprland overrides configuration file: %s", e)
        sys.exit(1)

    app = SettingsApp(SettingsController(store, HyprlandIPC()))
    sys.exit(app.run(sys.argv))
