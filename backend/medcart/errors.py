# backend/medcart/errors.py


class PrepDataError(Exception):
    """A medication record cannot back a dose-preparation exercise."""

    def __init__(self, message: str, record_id=None):
        super().__init__(message)
        self.record_id = record_id


class NoPreparationData(PrepDataError):
    """Record is not a medication or lacks prepMethod/prepTargetAmount/prepTargetUnit."""


class ParseError(PrepDataError):
    """A numeric prep field is present but unusable."""

    def __init__(self, message: str, record_id=None, field=None, value=None):
        super().__init__(message, record_id)
        self.field = field
        self.value = value


class AmbiguousMethodError(PrepDataError):
    """prepMethod is set but names neither a syringe nor a cup."""


class InvalidTransition(Exception):
    """An event arrived that is not legal for the session's current phase."""

    def __init__(self, phase, event: str):
        super().__init__(f"'{event}' is not allowed while {phase}")
        self.phase = phase
        self.event = event
