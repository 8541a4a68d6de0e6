# backend/medcart/services/session.py
"""
Guided dose-preparation exercise for one medication.

    choosing_method --select_method--> filling --submit--> showing_result
          ^                              |                     |
          +------------back--------------+                     |
          +-----------------------reset (try again)------------+

close() ends the session from any phase. Illegal events raise
InvalidTransition and leave the session exactly as it was.
"""
import logging
from typing import Optional, Union

from medcart.errors import InvalidTransition
from medcart.schemas import Phase, PrepMethod, PreparationTarget, SessionView, Verdict
from medcart.services import evaluation, input_mapper
from medcart.services.dosage import DEFAULT_MAX_AMOUNTS, STEP_SIZES, record_field, require_target

log = logging.getLogger("medcart.session")


class InteractionSession:

    def __init__(self, record, target: Optional[PreparationTarget] = None):
        # raises NoPreparationData / ParseError / AmbiguousMethodError
        self.target = target if target is not None else require_target(record)
        self.medication_id = record_field(record, "id")
        self.name = record_field(record, "name", "") or ""
        self.dosage = record_field(record, "dosage", "") or ""
        self.route = record_field(record, "route", "") or ""

        self.phase = Phase.CHOOSING_METHOD
        self.chosen_method: Optional[PrepMethod] = None
        self.current_amount = 0.0
        self.closed = False
        self._drag: Optional[input_mapper.DragTracker] = None

    def __repr__(self):
        return (f"<InteractionSession {self.medication_id} phase={self.phase.value} "
                f"method={self.chosen_method} amount={self.current_amount}>")

    # instrument geometry follows the chosen tool, not the record
    @property
    def step_size(self) -> float:
        if self.chosen_method is None or self.chosen_method is self.target.method:
            return self.target.step_size
        return STEP_SIZES[self.chosen_method]

    @property
    def max_amount(self) -> float:
        if self.chosen_method is None or self.chosen_method is self.target.method:
            return self.target.max_amount
        return DEFAULT_MAX_AMOUNTS[self.chosen_method]

    @property
    def unit(self) -> str:
        if self.chosen_method is PrepMethod.CUP:
            return "tablets"
        if self.chosen_method is self.target.method:
            return self.target.unit
        return "mL"

    @property
    def dragging(self) -> bool:
        return self._drag is not None and self._drag.dragging

    @property
    def can_submit(self) -> bool:
        return not self.closed and self.phase is Phase.FILLING and self.current_amount > 0

    def _require(self, event: str, *phases: Phase):
        if self.closed:
            log.debug("Rejected %s on closed session %s", event, self.medication_id)
            raise InvalidTransition("closed", event)
        if self.phase not in phases:
            log.debug("Rejected %s in phase %s", event, self.phase.value)
            raise InvalidTransition(self.phase.value, event)

    def _clear(self):
        self.phase = Phase.CHOOSING_METHOD
        self.chosen_method = None
        self.current_amount = 0.0
        self._drag = None

    # --- method selection -------------------------------------------------

    def select_method(self, method: Union[PrepMethod, str]):
        self._require("select_method", Phase.CHOOSING_METHOD)
        method = PrepMethod(method)  # ValueError for anything but syringe/cup
        self.chosen_method = method
        self.current_amount = 0.0
        self._drag = input_mapper.DragTracker(self.max_amount, self.step_size)
        self.phase = Phase.FILLING
        log.debug("Session %s: chose %s", self.medication_id, method.value)

    def back(self):
        self._require("back", Phase.FILLING)
        self._clear()

    # --- filling ----------------------------------------------------------

    def set_amount(self, amount: float) -> float:
        self._require("set_amount", Phase.FILLING)
        self.current_amount = input_mapper.quantize(amount, self.max_amount, self.step_size)
        return self.current_amount

    def adjust_amount(self, steps: int) -> float:
        """Move by whole steps (+1 / -1 for the plus and minus buttons). Fractional steps raise ValueError."""
        self._require("adjust_amount", Phase.FILLING)
        self.current_amount = input_mapper.adjust(self.current_amount, steps, self.max_amount, self.step_size)
        return self.current_amount

    def _require_syringe(self, event: str):
        self._require(event, Phase.FILLING)
        if self.chosen_method is not PrepMethod.SYRINGE:
            raise InvalidTransition(self.phase.value, f"{event} ({self.chosen_method.value})")

    def pointer_down(self, pointer_y: float, container_top: float, container_height: float) -> float:
        self._require_syringe("pointer_down")
        self.current_amount = self._drag.pointer_down(pointer_y, container_top, container_height)
        return self.current_amount

    def pointer_move(self, pointer_y: float, container_top: float, container_height: float) -> float:
        self._require_syringe("pointer_move")
        amount = self._drag.pointer_move(pointer_y, container_top, container_height)
        if amount is not None:
            self.current_amount = amount
        return self.current_amount

    def pointer_up(self):
        # ending a drag is always safe, whatever the phase
        if self._drag is not None:
            self._drag.release()

    pointer_leave = pointer_up
    pointer_cancel = pointer_up

    # --- result -----------------------------------------------------------

    def submit(self) -> Verdict:
        self._require("submit", Phase.FILLING)
        if self.current_amount <= 0:
            raise InvalidTransition(self.phase.value, "submit (nothing prepared)")
        self.pointer_up()
        self.phase = Phase.SHOWING_RESULT
        verdict = self.verdict
        log.info("Session %s: submitted %s via %s -> %s", self.medication_id,
                 self.current_amount, self.chosen_method.value,
                 "correct" if verdict.overall_correct else "incorrect")
        return verdict

    @property
    def verdict(self) -> Optional[Verdict]:
        if self.phase is not Phase.SHOWING_RESULT:
            return None
        return evaluation.evaluate(self, self.target)

    def reset(self):
        """Try again: back to method selection with nothing chosen."""
        self._require("reset", Phase.SHOWING_RESULT)
        self._clear()

    def close(self):
        """Done. Further events are rejected."""
        if self.closed:
            return
        self._clear()
        self.closed = True

    def view(self) -> SessionView:
        return SessionView(
            medication_id=self.medication_id,
            medication_name=self.name,
            dosage=self.dosage,
            route=self.route,
            phase=self.phase,
            chosen_method=self.chosen_method,
            current_amount=self.current_amount,
            max_amount=self.max_amount,
            step_size=self.step_size,
            unit=self.unit,
            dragging=self.dragging,
            can_submit=self.can_submit,
            closed=self.closed,
            verdict=self.verdict,
        )
