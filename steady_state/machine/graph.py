from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Any

from steady_state.config import get_logger, get_settings
from steady_state.errors import StateMachineDefinitionError

from .state import State, is_blank, label_of

logger = get_logger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def predicate_name(label: str) -> str:
    """Name of the boolean query for ``label``: ``"Step-1"`` -> ``"is_step_1"``."""
    return "is_" + _NON_ALNUM.sub("_", label.lower()).strip("_")


def _as_labels(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, State)) or not isinstance(value, Iterable):
        value = [value]
    labels: list[str] = []
    for item in value:
        if is_blank(item):
            raise StateMachineDefinitionError(f"Blank origin state in {value!r}")
        labels.append(label_of(item))
    return labels


class StateMachine:
    """Transition graph for one attribute.

    Edges are declared from the destination's side: ``state("liquid",
    from_="solid")`` adds ``solid -> liquid``. A state declared without
    origins is reachable only as the start state. The graph is populated
    once at declaration time and only read afterwards.
    """

    def __init__(self, strict: bool | None = None) -> None:
        self.start: str | None = None
        self.states: list[str] = []
        self._transitions: dict[str, list[str]] = {}
        self.strict = get_settings().STRICT_DEFAULT_STATE if strict is None else strict

    def state(self, label: Any, default: bool = False, from_: Any = ()) -> str:
        if is_blank(label):
            raise StateMachineDefinitionError("State labels must be non-empty")
        name = label_of(label)
        origins = _as_labels(from_)

        if default and self.start is not None and self.start != name:
            if self.strict:
                raise StateMachineDefinitionError(
                    f"Default state already declared: {self.start} (got {name})"
                )
            logger.warning("Default state redeclared: %s replaces %s", name, self.start)

        self.states.append(name)
        if default:
            self.start = name

        for origin in origins:
            destinations = self._transitions.setdefault(origin, [])
            if name not in destinations:
                destinations.append(name)
        return name

    declare_state = state

    @property
    def transitions(self) -> dict[str, tuple[str, ...]]:
        return {origin: tuple(targets) for origin, targets in self._transitions.items()}

    def reachable_from(self, label: Any) -> frozenset[str]:
        return frozenset(self._transitions.get(label_of(label), ()))

    def origins_of(self, label: Any) -> frozenset[str]:
        target = label_of(label)
        return frozenset(
            origin for origin, targets in self._transitions.items() if target in targets
        )

    def predicates(self) -> dict[str, str]:
        """Predicate name -> label. The first label wins when two normalize alike."""
        named: dict[str, str] = {}
        for label in self.states:
            named.setdefault(predicate_name(label), label)
        return named

    def predicate_names(self) -> list[str]:
        return list(self.predicates())

    def new_state(self, value: Any, last_valid_value: Any = None) -> State:
        return State(self, value, last_valid_value)

    def __contains__(self, value: object) -> bool:
        return label_of(value) in self.states

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(self.states))

    def __repr__(self) -> str:
        return f"StateMachine(start={self.start!r}, states={self.states!r})"
