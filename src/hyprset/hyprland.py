"""Hyprland IPC communication via Unix sockets."""

from __future__ import annotations

import socket
from pathlib import Path

from .catalog import first_layout_codes, parse_device_layouts
from .models import Keyboard, MonitorInfo
from .topology import parse_monitors
from .utils import hyprland_runtime_dir


class HyprctlError(RuntimeError):
    """A Hyprland IPC request failed or returned an unusable reply."""


def parse_option_value(reply: str) -> str:
    """Return the value token of a ``getoption`` reply (``float: 0.2 ...``)."""
    parts = reply.split()
    if len(parts) < 2:
        raise HyprctlError(f"Invalid getoption reply: {reply!r}")
    return parts[1]


def parse_option_float(reply: str) -> float:
    value = parse_option_value(reply)
    try:
        return float(value)
    except ValueError as e:
        raise HyprctlError(f"Invalid float option value: {value!r}") from e


def parse_option_bool(reply: str) -> bool:
    value = parse_option_value(reply)
    if value == "1":
        return True
    if value == "0":
        return False
    raise HyprctlError(f"Unexpected boolean option value: {value!r}")


class HyprlandIPC:
    """Communicate with Hyprland via its Unix socket IPC."""

    def __init__(self, runtime_dir: Path | None = None) -> None:
        self._runtime = runtime_dir or hyprland_runtime_dir()

    @property
    def command_socket(self) -> Path:
        return self._runtime / ".socket.sock"

    def _send(self, payload: bytes) -> bytes:
        """Send a raw command to the Hyprland command socket and return the response."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(str(self.command_socket))
            sock.sendall(payload)
            chunks: list[bytes] = []
            while True:
                chunk = sock.recv(8192)
                if not chunk:
                    break
                chunks.append(chunk)
            return b"".join(chunks)
        except OSError as e:
            raise HyprctlError(f"Cannot reach Hyprland at {self.command_socket}: {e}") from e
        finally:
            sock.close()

    def command(self, cmd: str) -> str:
        """Send a command and return the text response."""
        return self._send(cmd.encode()).decode(errors="replace")

    def command_json(self, cmd: str) -> str:
        """Send a -j command and return the raw JSON text."""
        return self.command(f"j/{cmd}")

    def keyword(self, key: str, value: str) -> None:
        """Send a keyword command (runtime config change)."""
        reply = self.command(f"keyword {key} {value}").strip()
        if reply != "ok":
            raise HyprctlError(f"keyword {key} {value} failed: {reply or 'no reply'}")

    def get_monitors(self) -> list[MonitorInfo]:
        """Query all connected monitors (including disabled)."""
        return parse_monitors(self.command("monitors all"))

    def get_keyboards(self) -> list[Keyboard]:
        """Query keyboards from the device list."""
        try:
            return parse_device_layouts(self.command_json("devices"))
        except ValueError as e:
            raise HyprctlError(f"Invalid devices reply: {e}") from e

    def get_current_locales(self) -> list[str]:
        """Layout codes of the first keyboard."""
        return first_layout_codes(self.get_keyboards())

    def get_sensitivity(self) -> float:
        return parse_option_float(self.command("getoption input:sensitivity"))

    def get_force_no_accel(self) -> bool:
        return parse_option_bool(self.command("getoption input:force_no_accel"))

    def apply_monitor(self, monitor: MonitorInfo) -> None:
        """Apply a monitor's mode and position live."""
        self.keyword("monitor", monitor.to_keyword_value())
