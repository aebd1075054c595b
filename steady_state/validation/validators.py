from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol

from steady_state.machine.state import label_of

from .errors import Errors

VALIDATORS_ATTR = "__validators__"


class PendingCheck(Protocol):
    def is_pending_invalid(self, obj: Any) -> bool: ...


class Validator(ABC):
    def __init__(self, attribute: str) -> None:
        self.attribute = attribute

    @property
    def key(self) -> tuple[type, str]:
        return type(self), self.attribute

    @abstractmethod
    def validate(self, obj: Any, errors: Errors) -> None:
        raise NotImplementedError


class InclusionValidator(Validator):
    """Adds ``inclusion`` when the attribute's label is not one of ``allowed``."""

    def __init__(self, attribute: str, allowed: Sequence[str]) -> None:
        super().__init__(attribute)
        self.allowed = allowed

    def validate(self, obj: Any, errors: Errors) -> None:
        if label_of(getattr(obj, self.attribute)) not in self.allowed:
            errors.add(self.attribute, "inclusion")


class TransitionValidator(Validator):
    """Adds ``invalid`` while a rejected transition is pending on the attribute."""

    def __init__(self, attribute: str, interceptor: PendingCheck) -> None:
        super().__init__(attribute)
        self.interceptor = interceptor

    def validate(self, obj: Any, errors: Errors) -> None:
        if self.interceptor.is_pending_invalid(obj):
            errors.add(self.attribute, "invalid")


def register_validator(owner: type, validator: Validator) -> None:
    registered = owner.__dict__.get(VALIDATORS_ATTR)
    if registered is None:
        registered = []
        setattr(owner, VALIDATORS_ATTR, registered)
    registered.append(validator)


def validators_for(owner: type) -> list[Validator]:
    """Validators declared on ``owner`` and its bases.

    Bases come first. A subclass that redeclares a validator of the same kind
    for the same attribute replaces the inherited one.
    """
    collected: dict[tuple[type, str], Validator] = {}
    for klass in reversed(owner.__mro__):
        for validator in klass.__dict__.get(VALIDATORS_ATTR, ()):
            collected.pop(validator.key, None)
            collected[validator.key] = validator
    return list(collected.values())


def run_validators(obj: Any, errors: Errors | None = None) -> Errors:
    errors = Errors() if errors is None else errors
    for validator in validators_for(type(obj)):
        validator.validate(obj, errors)
    return errors
