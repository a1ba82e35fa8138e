"""Tests for parsing ``hyprctl monitors all`` text output."""

from __future__ import annotations

from hyprset.models import Mode
from hyprset.topology import parse_monitors

from conftest import MONITORS_ALL


def test_single_monitor():
    monitors = parse_monitors(
        "Monitor DP-3 (ID 0):\n"
        "\t2560x1440@155.00000 at 0x0\n"
        "\tavailableModes: 2560x1440@59.95Hz 2560x1440@155.00Hz"
    )
    assert len(monitors) == 1
    m = monitors[0]
    assert m.id == 0
    assert m.name == "DP-3"
    assert m.current_resolution == "2560x1440"
    assert m.current_refresh_rate == 155.0
    assert m.position == (0, 0)
    assert m.available_modes == [
        Mode("2560x1440", 59.95),
        Mode("2560x1440", 155.0),
    ]


def test_multiple_monitors_in_order(monitors):
    assert [m.name for m in monitors] == ["DP-3", "HDMI-A-1"]
    assert [m.id for m in monitors] == [0, 1]
    assert monitors[1].position == (2560, 0)
    assert monitors[1].current_refresh_rate == 60.0
    assert len(monitors[0].available_modes) == 4
    assert len(monitors[1].available_modes) == 3


def test_description_and_other_lines_ignored(monitors):
    # "description: ..." has no '@ ... at' shape
    assert monitors[0].current_resolution == "2560x1440"


def test_malformed_mode_token_skipped():
    monitors = parse_monitors(
        "Monitor DP-1 (ID 2):\n"
        "\t1920x1080@60.00000 at -1920x0\n"
        "\tavailableModes: 1920x1080@60.00Hz bogus 1280x720@abcHz 1280x720@60 1280x720@59.94Hz\n"
    )
    m = monitors[0]
    assert m.position == (-1920, 0)
    assert m.current_resolution == "1920x1080"
    assert [mode.resolution for mode in m.available_modes] == ["1920x1080", "1280x720"]
    assert m.available_modes[1].refresh_rate == 59.94


def test_duplicate_modes_preserved():
    monitors = parse_monitors(
        "Monitor DP-1 (ID 0):\n"
        "\tavailableModes: 1920x1080@60.00Hz 1920x1080@60.00Hz\n"
    )
    assert len(monitors[0].available_modes) == 2


def test_malformed_header_dropped():
    monitors = parse_monitors(
        "Monitor DP-1 (ID x):\n"
        "\t1920x1080@60.00000 at 0x0\n"
        "Monitor DP-2 (ID 3):\n"
        "\t2560x1440@144.00000 at 1920x0\n"
    )
    assert [m.name for m in monitors] == ["DP-2"]
    assert monitors[0].position == (1920, 0)


def test_header_without_id_markers():
    assert parse_monitors("Monitor DP-1:\n\t1920x1080@60 at 0x0\n") == []


def test_lines_after_malformed_header_not_attributed_to_previous():
    monitors = parse_monitors(
        "Monitor DP-1 (ID 0):\n"
        "\t1920x1080@60.00000 at 0x0\n"
        "Monitor broken\n"
        "\t800x600@60.00000 at 5x5\n"
    )
    assert len(monitors) == 1
    assert monitors[0].current_resolution == "1920x1080"
    assert monitors[0].position == (0, 0)


def test_bad_subfields_keep_defaults():
    monitors = parse_monitors(
        "Monitor DP-1 (ID 0):\n"
        "\t1920x1080@fast at nowhere\n"
    )
    m = monitors[0]
    assert m.current_resolution == "1920x1080"
    assert m.current_refresh_rate == 0.0
    assert m.position == (0, 0)


def test_empty_input():
    assert parse_monitors("") == []
    assert parse_monitors("garbage\n\n") == []


def test_name_with_spaces_trimmed():
    monitors = parse_monitors("Monitor  eDP-1  (ID 7):\n")
    assert monitors[0].name == "eDP-1"
    assert monitors[0].id == 7


def test_sample_has_no_stray_fields():
    monitors = parse_monitors(MONITORS_ALL)
    assert all(m.current_refresh_rate > 0 for m in monitors)
