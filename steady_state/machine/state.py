from __future__ import annotations

from enum import Enum
from functools import cached_property, total_ordering
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .graph import StateMachine


def label_of(value: Any) -> str | None:
    """Coerce a raw field value, enum member or State into a plain label."""
    if value is None:
        return None
    if isinstance(value, State):
        return value.value
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def is_blank(value: Any) -> bool:
    label = label_of(value)
    return label is None or not label.strip()


@total_ordering
class State:
    """A state label bound to the machine it was read from.

    Compares, hashes and prints like the bare label. Transition queries are
    answered from ``last_valid_value`` while a rejected assignment is
    pending, so callers keep seeing the options of the last good state.
    A State without a label stands for "no value yet": it is falsy, renders
    as an empty string and equals ``None``.
    """

    def __init__(
        self,
        machine: StateMachine,
        value: Any,
        last_valid_value: Any = None,
    ) -> None:
        self.machine = machine
        self.value = label_of(value)
        self.last_valid_value = label_of(last_valid_value)

    @property
    def anchor(self) -> str | None:
        if self.last_valid_value is not None:
            return self.last_valid_value
        return self.value

    @property
    def is_pending(self) -> bool:
        return self.last_valid_value is not None

    @property
    def is_absent(self) -> bool:
        return self.value is None

    def may_become(self, new_value: Any) -> bool:
        return label_of(new_value) in self.next_values

    @cached_property
    def next_values(self) -> frozenset[str]:
        return self.machine.reachable_from(self.anchor)

    @cached_property
    def previous_values(self) -> frozenset[str]:
        return self.machine.origins_of(self.anchor)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, State):
            return self.value == other.value
        if other is None or isinstance(other, str):
            return self.value == other
        if isinstance(other, Enum):
            return self.value == label_of(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, State):
            other = other.value
        if isinstance(other, str) and self.value is not None:
            return self.value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __len__(self) -> int:
        return len(str(self))

    def __str__(self) -> str:
        return self.value or ""

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        if self.is_pending:
            return f"State({self.value!r}, last_valid_value={self.last_valid_value!r})"
        return f"State({self.value!r})"
