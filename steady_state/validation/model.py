from __future__ import annotations

from typing import Any

from steady_state.errors import ModelValidationError

from .errors import Errors
from .validators import run_validators


class ValidatedModel:
    """Keyword-argument construction plus a validation pass over the
    validators registered on the class hierarchy."""

    def __init__(self, **attributes: Any) -> None:
        for name, value in attributes.items():
            setattr(self, name, value)

    @property
    def errors(self) -> Errors:
        errors = self.__dict__.get("_errors")
        if errors is None:
            errors = Errors()
            self.__dict__["_errors"] = errors
        return errors

    def validate(self) -> bool:
        errors = self.errors
        errors.clear()
        run_validators(self, errors)
        return not errors

    def is_valid(self) -> bool:
        return self.validate()

    def validate_or_raise(self) -> None:
        if not self.validate():
            raise ModelValidationError(self.errors)
