# backend/medcart/services/cart.py
"""
Application state for the cart screen.

Each concern is its own small object so it can be built and tested alone;
CartController ties them together and is the only owner of the current
preparation session.
"""
import logging
from typing import Dict, List, Optional

from medcart.schemas import ItemType
from medcart.services.dosage import has_prep_data, record_field
from medcart.services.session import InteractionSession

log = logging.getLogger("medcart.cart")


class CartState:
    """Which drawer is pulled out. Clicking the open drawer closes it."""

    def __init__(self):
        self.open_drawer_id: Optional[str] = None

    def toggle(self, drawer_id: str) -> Optional[str]:
        self.open_drawer_id = None if self.open_drawer_id == drawer_id else drawer_id
        return self.open_drawer_id


class LabelState:
    """The item whose label is being viewed."""

    def __init__(self):
        self.selected = None

    def open(self, record):
        self.selected = record

    def close(self):
        self.selected = None

    @property
    def is_open(self) -> bool:
        return self.selected is not None

    @property
    def can_prepare(self) -> bool:
        return self.selected is not None and has_prep_data(self.selected)


class CartController:

    def __init__(self, drawers: List, medications: List):
        self.drawers = list(drawers)
        self.medications = list(medications)
        self.cart = CartState()
        self.label = LabelState()
        self.preparation: Optional[InteractionSession] = None

    def drawer(self, drawer_id: str):
        return next((d for d in self.drawers if record_field(d, "id") == drawer_id), None)

    def medication(self, medication_id: str):
        return next((m for m in self.medications if record_field(m, "id") == medication_id), None)

    def sorted_drawers(self) -> List:
        return sorted(self.drawers, key=lambda d: record_field(d, "position", 0))

    def drawer_items(self, drawer_id: str) -> Dict[str, List]:
        items = [m for m in self.medications
                 if record_field(m, "drawer_id") == drawer_id]
        meds = [m for m in items if record_field(m, "item_type") == ItemType.MEDICATION.value]
        tools = [m for m in items if record_field(m, "item_type") != ItemType.MEDICATION.value]
        return {"medications": meds, "tools": tools}

    def toggle_drawer(self, drawer_id: str) -> Optional[str]:
        return self.cart.toggle(drawer_id)

    def view_label(self, medication_id: str):
        record = self.medication(medication_id)
        self.label.open(record)
        return record

    def prepare_dose(self, record=None) -> InteractionSession:
        """Start a fresh exercise, discarding any previous one."""
        record = record if record is not None else self.label.selected
        session = InteractionSession(record)
        if self.preparation is not None:
            self.preparation.close()
        self.preparation = session
        self.label.close()
        log.debug("Opened preparation for %s", session.medication_id)
        return session

    def close_preparation(self):
        if self.preparation is not None:
            self.preparation.close()
        self.preparation = None
