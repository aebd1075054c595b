from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from steady_state.validation.errors import Errors


class SteadyStateError(Exception):
    """Base class for errors raised by steady_state."""


class StateMachineDefinitionError(SteadyStateError):
    """Raised when a state machine is declared incorrectly."""


class ModelValidationError(SteadyStateError):
    """Raised by validate_or_raise() when a model has errors."""

    def __init__(self, errors: Errors) -> None:
        self.errors = errors
        super().__init__("Validation failed: " + "; ".join(errors.full_messages()))
