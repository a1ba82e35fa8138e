"""Tests for the monitor and keyboard data models."""

from __future__ import annotations

from hyprset.models import Keyboard, MonitorInfo


class TestMonitorInfo:

    def test_override_line(self, monitors):
        dp, hdmi = monitors
        assert dp.to_override_line() == "monitor=DP-3,2560x1440@155,0x0,1"
        assert hdmi.to_keyword_value() == "HDMI-A-1,1920x1080@60,2560x0,1"

    def test_fractional_rate(self):
        m = MonitorInfo(name="eDP-1", current_resolution="2560x1600", current_refresh_rate=59.95)
        assert m.to_override_line() == "monitor=eDP-1,2560x1600@59.95,0x0,1"

    def test_anchor(self, monitors):
        assert monitors[0].is_anchor
        assert not monitors[1].is_anchor

    def test_mode_helpers(self, monitors):
        dp = monitors[0]
        assert dp.unique_resolutions() == ["2560x1440", "1920x1080"]
        assert dp.refresh_rates_for("1920x1080") == [60.0, 144.0]

    def test_size(self, monitors):
        assert monitors[0].size == (2560, 1440)
        assert MonitorInfo(current_resolution="bogus").size == (1920, 1080)


def test_keyboard_layout_codes():
    kb = Keyboard(name="kb", layout="us, fi,,us")
    assert kb.layout_codes == ["us", "fi"]
