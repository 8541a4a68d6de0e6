# backend/medcart/schemas.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ItemType(str, Enum):
    MEDICATION = "medication"
    TOOL = "tool"
    SUPPLY = "supply"


class PrepMethod(str, Enum):
    SYRINGE = "syringe"
    CUP = "cup"


class Phase(str, Enum):
    CHOOSING_METHOD = "choosing_method"
    FILLING = "filling"
    SHOWING_RESULT = "showing_result"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DrawerIn(CamelModel):
    label: str
    position: int
    color: str = "#6B7280"
    size: str = "standard"


class DrawerOut(DrawerIn):
    id: str


class MedicationIn(CamelModel):
    drawer_id: str
    name: str
    generic_name: Optional[str] = None
    brand_name: Optional[str] = None
    dosage: str
    form: str
    route: str
    frequency: Optional[str] = None
    classification: str
    indication: Optional[str] = None
    contraindications: Optional[str] = None
    side_effects: Optional[str] = None
    nursing_considerations: Optional[str] = None
    warnings: Optional[str] = None
    storage_instructions: Optional[str] = Field(default=None, alias="storage")
    manufacturer: Optional[str] = None
    ndc_number: Optional[str] = None
    controlled_substance: Optional[bool] = False
    schedule_class: Optional[str] = None
    color: Optional[str] = "#3B82F6"
    # plain str so records with unknown values still load; the interpreter decides eligibility
    item_type: str = ItemType.MEDICATION.value
    prep_method: Optional[str] = None
    prep_target_amount: Optional[str] = None
    prep_target_unit: Optional[str] = None
    prep_max_amount: Optional[str] = None


class MedicationRecord(MedicationIn):
    id: str


class PreparationTarget(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    target_amount: float
    unit: str
    method: PrepMethod
    max_amount: float
    step_size: float
    tablet_count: Optional[float] = None


class Verdict(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    amount_correct: bool
    method_correct: bool
    overall_correct: bool
    chosen_method: PrepMethod
    expected_method: PrepMethod
    submitted_amount: float
    target_amount: float
    submitted_display: str
    target_display: str
    title: str
    method_message: Optional[str] = None
    amount_message: Optional[str] = None
    success_message: Optional[str] = None

    @property
    def messages(self) -> List[str]:
        return [m for m in (self.method_message, self.amount_message, self.success_message) if m]


class SessionView(CamelModel):
    medication_id: Optional[str] = None
    medication_name: str
    dosage: str
    route: str
    phase: Phase
    chosen_method: Optional[PrepMethod] = None
    current_amount: float
    max_amount: float
    step_size: float
    unit: str
    dragging: bool = False
    can_submit: bool = False
    closed: bool = False
    verdict: Optional[Verdict] = None
