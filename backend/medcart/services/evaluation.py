# backend/medcart/services/evaluation.py
from medcart.schemas import PrepMethod, PreparationTarget, Verdict

# absorbs decimal noise from quantization only; not a dosing allowance
AMOUNT_TOLERANCE = 0.01

METHOD_NAMES = {
    PrepMethod.SYRINGE: "syringe",
    PrepMethod.CUP: "medication cup",
}


def expected_method(target: PreparationTarget) -> PrepMethod:
    if target.method is PrepMethod.SYRINGE:
        return PrepMethod.SYRINGE
    if target.method is PrepMethod.CUP:
        return PrepMethod.CUP
    raise ValueError(f"Unknown preparation method: {target.method!r}")


def amount_matches(amount: float, target_amount: float) -> bool:
    return abs(amount - target_amount) < AMOUNT_TOLERANCE


def _fmt_count(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else f"{amount:g}"


def format_amount(amount: float, method: PrepMethod, unit: str = "mL") -> str:
    """Tablets as a whole count with a pluralised noun, liquids to one decimal with unit."""
    if method is PrepMethod.CUP:
        noun = "tablet" if amount == 1 else "tablets"
        return f"{_fmt_count(amount)} {noun}"
    return f"{amount:.1f} {unit or 'mL'}"


def evaluate(session, target: PreparationTarget) -> Verdict:
    """
    Grade a submitted attempt. Reads session.chosen_method,
    session.current_amount and session.dosage; never mutates the session.
    """
    chosen = session.chosen_method
    if chosen is None:
        raise ValueError("Cannot evaluate a session with no delivery method chosen")
    amount = session.current_amount

    correct_method = expected_method(target)
    amount_ok = amount_matches(amount, target.target_amount)
    method_ok = chosen is correct_method
    overall = amount_ok and method_ok

    # amounts are reported in the units of the instrument the student used
    unit = target.unit if chosen is target.method else "mL"
    submitted_display = format_amount(amount, chosen, unit)
    target_display = format_amount(target.target_amount, chosen, unit)

    method_message = None
    if not method_ok:
        method_message = (
            f"A {METHOD_NAMES[correct_method]} would be the correct delivery method for this medication."
        )

    amount_message = None
    if not amount_ok:
        amount_message = f"You prepared {submitted_display}. The correct dose is {target_display}."

    success_message = None
    if overall:
        success_message = f"You correctly prepared {session.dosage} using a {METHOD_NAMES[chosen]}."

    return Verdict(
        amount_correct=amount_ok,
        method_correct=method_ok,
        overall_correct=overall,
        chosen_method=chosen,
        expected_method=correct_method,
        submitted_amount=amount,
        target_amount=target.target_amount,
        submitted_display=submitted_display,
        target_display=target_display,
        title="Correct!" if overall else "Not Quite Right",
        method_message=method_message,
        amount_message=amount_message,
        success_message=success_message,
    )
