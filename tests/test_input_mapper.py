"""Tests for pointer/button input quantization."""
import math

import pytest

from medcart.services.input_mapper import (
    DragMode,
    DragTracker,
    adjust,
    map_position,
    quantize,
    tick_labels,
    tick_marks,
)

# barrel 200px tall starting at y=100
TOP, HEIGHT = 100.0, 200.0


def _is_multiple(value, step):
    return math.isclose(round(value / step) * step, value, abs_tol=1e-9)


def test_empty_at_bottom_full_at_top():
    assert map_position(TOP + HEIGHT, TOP, HEIGHT, 10, 0.5) == 0
    assert map_position(TOP, TOP, HEIGHT, 10, 0.5) == 10


def test_pointer_outside_barrel_is_clamped():
    assert map_position(TOP + HEIGHT + 50, TOP, HEIGHT, 10, 0.5) == 0
    assert map_position(TOP - 50, TOP, HEIGHT, 10, 0.5) == 10


def test_position_snaps_to_step():
    # 26% of the way up -> 2.6 mL -> nearest 0.5 is 2.5
    y = TOP + HEIGHT * (1 - 0.26)
    assert map_position(y, TOP, HEIGHT, 10, 0.5) == 2.5
    # 2.75 sits halfway between steps and rounds up
    assert map_position(245.0, TOP, HEIGHT, 10, 0.5) == 3.0


def test_zero_height_container_is_rejected():
    with pytest.raises(ValueError):
        map_position(10, 0, 0, 10, 0.5)


def test_repeated_events_do_not_drift():
    """Each event maps from the absolute position."""
    y = TOP + HEIGHT * (1 - 0.33)
    first = map_position(y, TOP, HEIGHT, 10, 0.5)
    for _ in range(50):
        assert map_position(y, TOP, HEIGHT, 10, 0.5) == first


@pytest.mark.parametrize("raw", [-3, -0.1, 0, 0.24, 0.26, 1.3, 4.75, 7.01, 9.99, 10, 12, 1e9])
@pytest.mark.parametrize("max_amount,step", [(10, 0.5), (6, 1), (20, 0.5), (7.3, 0.5)])
def test_quantize_stays_on_grid_and_in_range(raw, max_amount, step):
    value = quantize(raw, max_amount, step)
    assert 0 <= value <= max_amount
    assert _is_multiple(value, step)


def test_quantize_handles_nan():
    assert quantize(float("nan"), 10, 0.5) == 0


def test_adjust_steps_and_clamps():
    assert adjust(2.5, 1, 10, 0.5) == 3.0
    assert adjust(2.5, -1, 10, 0.5) == 2.0
    assert adjust(0, -1, 10, 0.5) == 0
    assert adjust(10, 1, 10, 0.5) == 10
    assert adjust(5, 1, 6, 1) == 6
    assert adjust(6, 1, 6, 1) == 6


def test_adjust_has_no_float_noise():
    amount = 0.0
    for _ in range(7):
        amount = adjust(amount, 1, 10, 0.5)
    assert amount == 3.5
    assert repr(amount) == "3.5"


def test_tick_marks():
    assert tick_marks(2, 0.5) == [0.0, 0.5, 1.0, 1.5, 2.0]
    assert tick_labels(2, 0.5) == [0.0, 1.0, 2.0]
    assert len(tick_marks(10, 0.5)) == 21


def test_drag_tracker_move_only_while_dragging():
    tracker = DragTracker(10, 0.5)
    assert tracker.mode is DragMode.IDLE
    assert tracker.pointer_move(TOP, TOP, HEIGHT) is None

    assert tracker.pointer_down(TOP + HEIGHT / 2, TOP, HEIGHT) == 5.0
    assert tracker.dragging
    assert tracker.pointer_move(TOP, TOP, HEIGHT) == 10


@pytest.mark.parametrize("end", ["pointer_up", "pointer_leave", "pointer_cancel"])
def test_drag_always_terminates(end):
    """Leaving the barrel or cancelling ends the drag just like releasing."""
    tracker = DragTracker(10, 0.5)
    tracker.pointer_down(TOP + HEIGHT / 2, TOP, HEIGHT)
    assert getattr(tracker, end)() is DragMode.IDLE
    assert not tracker.dragging
    assert tracker.pointer_move(TOP, TOP, HEIGHT) is None
    # ending twice is harmless
    assert getattr(tracker, end)() is DragMode.IDLE


def test_adjust_rejects_fractional_steps():
    with pytest.raises(ValueError):
        adjust(2.5, -0.5, 10, 0.5)
