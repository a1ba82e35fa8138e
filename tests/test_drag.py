"""Tests for the drag/click state machine."""

from __future__ import annotations

import pytest

from hyprset.drag import DRAG_THRESHOLD, DragSession, DragState, ReleaseResult


def _center(session: DragSession, index: int) -> tuple[float, float]:
    b = session.boxes[index]
    return b.visual_x + b.visual_width / 2, b.visual_y + b.visual_height / 2


@pytest.fixture
def committed():
    return []


@pytest.fixture
def session(monitors, committed) -> DragSession:
    return DragSession(monitors, on_commit=lambda i, m: committed.append((i, m.position)))


def test_starts_idle(session):
    assert session.state is DragState.IDLE
    assert session.dragging_index is None
    assert session.selected_index is None
    assert len(session.boxes) == 2


def test_hit_test(session):
    assert session.hit_test(*_center(session, 0)) == 0
    assert session.hit_test(*_center(session, 1)) == 1
    assert session.hit_test(-5, -5) is None


def test_anchor_never_drags(session, committed):
    x, y = _center(session, 0)
    assert session.monitors[0].is_anchor
    assert session.press(x, y) is False
    assert session.state is DragState.IDLE
    before = (session.boxes[0].visual_x, session.boxes[0].visual_y)
    session.move(x + 50, y + 50)
    assert (session.boxes[0].visual_x, session.boxes[0].visual_y) == before
    assert session.release() is ReleaseResult.CLICKED
    assert session.monitors[0].position == (0, 0)
    assert committed == []


def test_anchor_click_toggles_selection(session):
    x, y = _center(session, 0)
    session.press(x, y)
    session.release()
    assert session.selected_index == 0
    session.press(x, y)
    session.release()
    assert session.selected_index is None


def test_drag_moves_box_and_commits(session, committed):
    scale = session.transform.scale_factor
    x, y = _center(session, 1)
    assert session.press(x, y) is True
    assert session.state is DragState.DRAGGING
    assert session.dragging_index == 1

    start = session.boxes[1].visual_x
    session.move(x + 10, y)
    session.move(x + 20, y + 5)
    assert session.boxes[1].visual_x == pytest.approx(start + 20)
    assert session.did_drag

    assert session.release() is ReleaseResult.MOVED
    assert session.state is DragState.IDLE
    expected = (2560 + round(20 / scale), round(5 / scale))
    assert session.monitors[1].position == expected
    assert committed == [(1, expected)]
    assert session.selected_index is None


def test_sub_threshold_move_is_a_click(session, committed):
    x, y = _center(session, 1)
    start = (session.boxes[1].visual_x, session.boxes[1].visual_y)
    session.press(x, y)
    session.move(x + DRAG_THRESHOLD / 2, y - DRAG_THRESHOLD / 2)
    assert not session.did_drag
    assert session.release() is ReleaseResult.CLICKED
    assert session.selected_index == 1
    assert (session.boxes[1].visual_x, session.boxes[1].visual_y) == start
    assert session.monitors[1].position == (2560, 0)
    assert committed == []


def test_threshold_uses_cumulative_movement(session):
    x, y = _center(session, 1)
    session.press(x, y)
    for step in range(1, 5):
        session.move(x + step * 0.4, y)
    assert session.did_drag


def test_move_back_and_forth_returns_to_origin(session, committed):
    x, y = _center(session, 1)
    session.press(x, y)
    session.move(x + 30, y + 30)
    session.move(x, y)
    # Large excursion counted as a drag even though it ends where it began
    assert session.release() is ReleaseResult.MOVED
    assert committed == [(1, (2560, 0))]


def test_release_over_nothing(session):
    session.press(-10, -10)
    assert session.release() is ReleaseResult.NONE


def test_second_press_while_dragging_ignored(session):
    x, y = _center(session, 1)
    session.press(x, y)
    assert session.press(*_center(session, 0)) is False
    assert session.dragging_index == 1


def test_cancel_restores_box(session, committed):
    x, y = _center(session, 1)
    start = (session.boxes[1].visual_x, session.boxes[1].visual_y)
    session.press(x, y)
    session.move(x + 40, y + 40)
    session.cancel()
    assert session.state is DragState.IDLE
    assert (session.boxes[1].visual_x, session.boxes[1].visual_y) == start
    assert session.release() is ReleaseResult.NONE
    assert committed == []


def test_transform_frozen_during_drag(session):
    before = session.transform
    x, y = _center(session, 1)
    session.press(x, y)
    session.move(x + 200, y + 200)
    assert session.transform is before
    session.release()
    assert session.transform is before


def test_set_monitors_recomputes_and_clears_stale_selection(session, monitors):
    x, y = _center(session, 1)
    session.press(x, y)
    session.release()
    assert session.selected_index == 1
    session.set_monitors(monitors[:1])
    assert session.selected_index is None
    assert len(session.boxes) == 1


def test_committed_drag_round_trips(session):
    x, y = _center(session, 1)
    session.press(x, y)
    session.move(x + 13.7, y - 4.2)
    session.release()
    session.set_monitors(session.monitors)
    t = session.transform
    for m, b in zip(session.monitors, session.boxes):
        assert t.to_real(b.visual_x, b.visual_y) == m.position
