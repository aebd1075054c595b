from .errors import MESSAGES, ErrorDetail, Errors
from .model import ValidatedModel
from .validators import (
    InclusionValidator,
    TransitionValidator,
    Validator,
    register_validator,
    run_validators,
    validators_for,
)

__all__ = [
    "MESSAGES",
    "ErrorDetail",
    "Errors",
    "InclusionValidator",
    "TransitionValidator",
    "ValidatedModel",
    "Validator",
    "register_validator",
    "run_validators",
    "validators_for",
]
