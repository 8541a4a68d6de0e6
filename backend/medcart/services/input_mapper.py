# backend/medcart/services/input_mapper.py
"""
Pointer and button input for the syringe barrel and tablet counter.

Every drag event recomputes the amount from the absolute pointer position
and the barrel geometry; nothing is accumulated between events, so rapid
moves cannot drift.
"""
import math
from enum import Enum
from typing import List, Optional


def _round_half_up(value: float, places: int = 0) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def quantize(amount: float, max_amount: float, step_size: float) -> float:
    """Snap to the nearest step, round to 0.1 and clamp to [0, max_amount]."""
    if step_size <= 0:
        raise ValueError("step_size must be positive")
    if max_amount <= 0 or amount is None or math.isnan(amount) or amount <= 0:
        return 0.0

    amount = min(amount, max_amount)
    snapped = _round_half_up(amount / step_size) * step_size
    rounded = _round_half_up(snapped, 1)
    if rounded > max_amount:
        # max_amount is not on the step grid; take the highest step below it
        rounded = _round_half_up(math.floor(max_amount / step_size + 1e-9) * step_size, 1)
    return max(0.0, rounded)


def map_position(pointer_y: float, container_top: float, container_height: float,
                 max_amount: float, step_size: float) -> float:
    """
    Convert a vertical pointer position over the barrel into a fill amount.
    The bottom edge of the container is empty, the top edge is full.
    """
    if container_height <= 0:
        raise ValueError("container_height must be positive")
    fraction = (container_top + container_height - pointer_y) / container_height
    fraction = max(0.0, min(1.0, fraction))
    return quantize(fraction * max_amount, max_amount, step_size)


def adjust(amount: float, steps: int, max_amount: float, step_size: float) -> float:
    """Increment/decrement control: move by whole steps, clamped."""
    if isinstance(steps, bool) or not isinstance(steps, int):
        raise ValueError(f"steps must be a whole number of steps, got {steps!r}")
    return quantize(amount + steps * step_size, max_amount, step_size)


def tick_marks(max_amount: float, step_size: float) -> List[float]:
    """Graduation values from 0 to max_amount inclusive."""
    if step_size <= 0 or max_amount <= 0:
        return [0.0]
    count = int(math.floor(max_amount / step_size + 1e-9))
    return [_round_half_up(i * step_size, 1) for i in range(count + 1)]


def tick_labels(max_amount: float, step_size: float) -> List[float]:
    # every second graduation carries a number
    return tick_marks(max_amount, step_size)[::2]


class DragMode(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragTracker:
    """
    Explicit pointer interaction mode for the syringe barrel.

    up, leave and cancel all end a drag the same way, so the tracker can
    never be left dragging after the pointer is gone.
    """

    def __init__(self, max_amount: float, step_size: float):
        self.max_amount = max_amount
        self.step_size = step_size
        self.mode = DragMode.IDLE

    @property
    def dragging(self) -> bool:
        return self.mode is DragMode.DRAGGING

    def pointer_down(self, pointer_y, container_top, container_height) -> float:
        amount = map_position(pointer_y, container_top, container_height, self.max_amount, self.step_size)
        self.mode = DragMode.DRAGGING
        return amount

    def pointer_move(self, pointer_y, container_top, container_height) -> Optional[float]:
        if not self.dragging:
            return None
        return map_position(pointer_y, container_top, container_height, self.max_amount, self.step_size)

    def release(self) -> DragMode:
        self.mode = DragMode.IDLE
        return self.mode

    pointer_up = release
    pointer_leave = release
    pointer_cancel = release
