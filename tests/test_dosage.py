"""Tests for the dosage interpreter."""
import pytest

from conftest import make_record
from medcart.errors import AmbiguousMethodError, NoPreparationData, ParseError
from medcart.schemas import MedicationRecord, PrepMethod
from medcart.services.dosage import has_prep_data, interpret, require_target


def test_syringe_defaults(syringe_record):
    """Syringe targets get 0.5 mL steps and a 10 mL barrel by default."""
    target = interpret(syringe_record)
    assert target.method is PrepMethod.SYRINGE
    assert target.target_amount == 2.5
    assert target.unit == "mL"
    assert target.max_amount == 10
    assert target.step_size == 0.5
    assert target.tablet_count is None


def test_cup_defaults(cup_record):
    target = interpret(cup_record)
    assert target.method is PrepMethod.CUP
    assert target.max_amount == 6
    assert target.step_size == 1
    assert target.tablet_count == 2


def test_explicit_max_amount():
    target = interpret(make_record(prepTargetAmount="15", prepMaxAmount="20"))
    assert target.max_amount == 20
    assert target.target_amount == 15


@pytest.mark.parametrize("field", ["prepMethod", "prepTargetAmount", "prepTargetUnit"])
@pytest.mark.parametrize("missing", [None, ""])
def test_missing_prep_field_means_no_data(field, missing):
    """Any one missing required field disables the exercise."""
    record = make_record(**{field: missing})
    assert interpret(record) is None
    assert not has_prep_data(record)


@pytest.mark.parametrize("item_type", ["tool", "supply"])
def test_non_medication_has_no_data(item_type):
    record = make_record(itemType=item_type)
    assert interpret(record) is None
    with pytest.raises(NoPreparationData):
        require_target(record)


def test_missing_max_is_not_required():
    assert interpret(make_record(prepMaxAmount="")) is not None


@pytest.mark.parametrize("value", ["abc", "2,5", "nan", "inf", "-1"])
def test_malformed_target_amount_raises(value):
    with pytest.raises(ParseError) as exc:
        interpret(make_record(prepTargetAmount=value))
    assert exc.value.field == "prepTargetAmount"
    assert exc.value.record_id == "med-1"


def test_malformed_max_amount_raises():
    with pytest.raises(ParseError) as exc:
        interpret(make_record(prepMaxAmount="ten"))
    assert exc.value.field == "prepMaxAmount"


def test_target_above_instrument_range_raises():
    with pytest.raises(ParseError):
        interpret(make_record(prepTargetAmount="12"))


def test_unknown_method_is_flagged():
    with pytest.raises(AmbiguousMethodError):
        interpret(make_record(prepMethod="vial"))


def test_accepts_snake_case_and_pydantic_records():
    snake = {
        "id": "x", "item_type": "medication", "prep_method": "cup",
        "prep_target_amount": "3", "prep_target_unit": "tablets",
    }
    assert interpret(snake).target_amount == 3

    record = MedicationRecord(**make_record())
    assert record.prep_target_amount == "2.5"
    assert interpret(record).target_amount == 2.5


def test_interpret_has_no_side_effects(syringe_record):
    before = dict(syringe_record)
    assert interpret(syringe_record) == interpret(syringe_record)
    assert syringe_record == before
