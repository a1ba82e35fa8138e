"""Shared fixtures: sample hyprctl output and a fake IPC client."""

from __future__ import annotations

import pytest

from hyprset.hyprland import HyprctlError, HyprlandIPC
from hyprset.models import MonitorInfo
from hyprset.overrides import OverrideStore
from hyprset.topology import parse_monitors


MONITORS_ALL = """\
Monitor DP-3 (ID 0):
	2560x1440@155.00000 at 0x0
	description: AOC Q27G2SG4 XFXP8HA003779
	make: AOC
	model: Q27G2SG4
	availableModes: 2560x1440@59.95Hz 2560x1440@155.00Hz 1920x1080@60.00Hz 1920x1080@144.00Hz
	focused: yes

Monitor HDMI-A-1 (ID 1):
	1920x1080@60.00000 at 2560x0
	description: Dell Inc. DELL P2419H 5XXXXX2
	availableModes: 1920x1080@60.00Hz 1920x1080@50.00Hz 1280x720@60.00Hz
	focused: no
"""


class FakeIPC(HyprlandIPC):
    """HyprlandIPC answering from canned replies instead of a socket."""

    def __init__(self, replies: dict[str, str] | None = None, fail: bool = False) -> None:
        super().__init__()
        self.replies = dict(replies or {})
        self.fail = fail
        self.sent: list[str] = []

    def command(self, cmd: str) -> str:
        self.sent.append(cmd)
        if self.fail:
            raise HyprctlError("socket unavailable")
        return self.replies.get(cmd, "ok")


@pytest.fixture
def monitors() -> list[MonitorInfo]:
    return parse_monitors(MONITORS_ALL)


@pytest.fixture
def store(tmp_path) -> OverrideStore:
    """Bootstrapped store inside a temporary hypr config directory."""
    hypr = tmp_path / "hypr"
    hypr.mkdir()
    (hypr / "hyprland.conf").write_text("monitor=,preferred,auto,1\n", encoding="utf-8")
    s = OverrideStore(hypr / "hyprland.conf", hypr / "conf-overrides.conf")
    s.ensure_exists()
    return s


@pytest.fixture
def fake_ipc() -> FakeIPC:
    return FakeIPC({
        "monitors all": MONITORS_ALL,
        "j/devices": (
            '{"mice": [], "keyboards": ['
            '{"name": "power-button", "layout": "us"},'
            '{"name": "at-translated-set-2-keyboard", "layout": "us,fi"}'
            ']}'
        ),
        "getoption input:sensitivity": "float: 0.200000\nset: true",
        "getoption input:force_no_accel": "int: 1\nset: true",
    })
