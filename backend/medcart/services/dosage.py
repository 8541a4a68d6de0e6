# backend/medcart/services/dosage.py
import logging
import math
from typing import Any, Optional

from medcart.errors import AmbiguousMethodError, NoPreparationData, ParseError
from medcart.schemas import ItemType, PrepMethod, PreparationTarget

log = logging.getLogger("medcart.dosage")

# instrument defaults keyed by delivery method
STEP_SIZES = {
    PrepMethod.SYRINGE: 0.5,   # fractional mL
    PrepMethod.CUP: 1.0,       # whole tablets only
}
DEFAULT_MAX_AMOUNTS = {
    PrepMethod.SYRINGE: 10.0,
    PrepMethod.CUP: 6.0,
}

_FIELDS = {
    "id": ("id", "id"),
    "item_type": ("item_type", "itemType"),
    "prep_method": ("prep_method", "prepMethod"),
    "prep_target_amount": ("prep_target_amount", "prepTargetAmount"),
    "prep_target_unit": ("prep_target_unit", "prepTargetUnit"),
    "prep_max_amount": ("prep_max_amount", "prepMaxAmount"),
    "drawer_id": ("drawer_id", "drawerId"),
    "side_effects": ("side_effects", "sideEffects"),
    "nursing_considerations": ("nursing_considerations", "nursingConsiderations"),
    "storage_instructions": ("storage_instructions", "storage"),
}


def record_field(record: Any, name: str, default=None):
    """
    Read a field from an ORM row, a pydantic record or a plain dict.
    Dicts may use either the column name or the camelCase wire name.
    """
    snake, camel = _FIELDS.get(name, (name, name))
    if isinstance(record, dict):
        if snake in record:
            return record[snake]
        return record.get(camel, default)
    return getattr(record, snake, default)


def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _parse_decimal(value, field: str, record_id=None) -> float:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        log.warning("Record %s has unparseable %s=%r", record_id, field, value)
        raise ParseError(f"{field} is not a decimal number: {value!r}", record_id, field, value)
    if not math.isfinite(number) or number < 0:
        log.warning("Record %s has out-of-range %s=%r", record_id, field, value)
        raise ParseError(f"{field} must be a finite, non-negative number: {value!r}", record_id, field, value)
    return number


def _item_type(record) -> str:
    value = record_field(record, "item_type", ItemType.MEDICATION.value)
    return value.value if isinstance(value, ItemType) else str(value)


def has_prep_data(record) -> bool:
    """True when the record carries the three required prep fields and is a medication."""
    if record is None or _item_type(record) != ItemType.MEDICATION.value:
        return False
    return all(_present(record_field(record, f)) for f in ("prep_method", "prep_target_amount", "prep_target_unit"))


def interpret(record) -> Optional[PreparationTarget]:
    """
    Derive the preparation target for a medication record.

    Returns None when the exercise is unavailable for the record (not a
    medication, or any of prepMethod / prepTargetAmount / prepTargetUnit
    missing). Never guesses a target.

    Raises:
        ParseError: a numeric prep field cannot be used
        AmbiguousMethodError: prepMethod names neither syringe nor cup
    """
    if not has_prep_data(record):
        return None

    record_id = record_field(record, "id")
    raw_method = record_field(record, "prep_method")
    raw_method = raw_method.value if isinstance(raw_method, PrepMethod) else str(raw_method).strip().lower()
    try:
        method = PrepMethod(raw_method)
    except ValueError:
        log.warning("Record %s has prepMethod=%r; expected method cannot be derived", record_id, raw_method)
        raise AmbiguousMethodError(f"prepMethod {raw_method!r} is neither syringe nor cup", record_id)

    target = _parse_decimal(record_field(record, "prep_target_amount"), "prepTargetAmount", record_id)
    raw_max = record_field(record, "prep_max_amount")
    if _present(raw_max):
        max_amount = _parse_decimal(raw_max, "prepMaxAmount", record_id)
    else:
        max_amount = DEFAULT_MAX_AMOUNTS[method]

    if max_amount <= 0 or target > max_amount:
        log.warning("Record %s target %s outside instrument range 0..%s", record_id, target, max_amount)
        raise ParseError(
            f"prepTargetAmount {target} is outside 0..{max_amount}", record_id, "prepTargetAmount", target
        )

    return PreparationTarget(
        target_amount=target,
        unit=str(record_field(record, "prep_target_unit")).strip(),
        method=method,
        max_amount=max_amount,
        step_size=STEP_SIZES[method],
        tablet_count=target if method is PrepMethod.CUP else None,
    )


def require_target(record) -> PreparationTarget:
    """Like interpret(), but raises NoPreparationData instead of returning None."""
    target = interpret(record)
    if target is None:
        record_id = record_field(record, "id") if record is not None else None
        raise NoPreparationData("No dose preparation data for this item", record_id)
    return target
