from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from steady_state.config import get_logger, get_settings
from steady_state.machine.definition import MachineDefinition, ScopeOptions
from steady_state.machine.graph import StateMachine
from steady_state.machine.state import State
from steady_state.validation.validators import (
    InclusionValidator,
    TransitionValidator,
    register_validator,
)

from .interceptor import StateAttribute, resolve_field_access

logger = get_logger(__name__)

MACHINES_ATTR = "__state_machines__"

Builder = Union[Callable[[StateMachine], Any], MachineDefinition]


def pluralize(word: str) -> str:
    """Default states getter name for an attribute.

    Only regular English plurals are produced (``person`` becomes
    ``persons``); pass ``states_getter="<name>"`` to pick another name.
    """
    if re.search(r"[^aeiou]y$", word):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", word):
        return word + "es"
    return word + "s"


def supports_query_filters(owner: type) -> bool:
    return callable(getattr(owner, "scope", None))


def scopes_by_default(owner: type) -> bool:
    """Persistent models (``QueryScopes`` subclasses) get filters unless told otherwise."""
    return bool(getattr(owner, "__supports_scopes__", False)) and supports_query_filters(owner)


@dataclass
class DeclarationOptions:
    predicates: bool = True
    states_getter: bool | str = True
    scopes: ScopeOptions | None = None
    strict: bool = False

    @classmethod
    def resolve(
        cls,
        owner: type,
        *,
        predicates: bool | None = None,
        states_getter: bool | str | None = None,
        scopes: bool | dict[str, Any] | ScopeOptions | None = None,
        strict: bool | None = None,
    ) -> DeclarationOptions:
        settings = get_settings()
        if scopes is None:
            scopes = scopes_by_default(owner)
        if scopes is True:
            scope_options: ScopeOptions | None = ScopeOptions()
        elif scopes is False:
            scope_options = None
        elif isinstance(scopes, ScopeOptions):
            scope_options = scopes
        else:
            scope_options = ScopeOptions.model_validate(scopes)

        return cls(
            predicates=settings.PREDICATES if predicates is None else bool(predicates),
            states_getter=settings.STATES_GETTER if states_getter is None else states_getter,
            scopes=scope_options,
            strict=settings.STRICT_DEFAULT_STATE if strict is None else bool(strict),
        )


class StatesGetter:
    """Class and instance level accessor listing every declared state."""

    def __init__(self, machine: StateMachine) -> None:
        self.machine = machine

    def __get__(self, obj: Any, owner: type | None = None) -> list[State]:
        return [self.machine.new_state(label) for label in self.machine.states]


def _make_predicate(attr_name: str, label: str, name: str) -> Callable[[Any], bool]:
    def predicate(self: Any) -> bool:
        return getattr(self, attr_name) == label

    predicate.__name__ = name
    predicate.__qualname__ = name
    predicate.__doc__ = f"Whether {attr_name} is currently {label!r}."
    predicate.state_attribute = attr_name  # type: ignore[attr-defined]
    return predicate


def _remove_predicates(owner: type, attr_name: str, machine: StateMachine) -> None:
    for name in machine.predicates():
        installed = owner.__dict__.get(name)
        if getattr(installed, "state_attribute", None) == attr_name:
            delattr(owner, name)


def _make_filter(attr_name: str, label: str) -> Callable[[Any], Any]:
    def apply(query: Any) -> Any:
        return query.filter_by(**{attr_name: label})

    return apply


def state_machines(owner: type) -> dict[str, StateMachine]:
    """Machines declared on ``owner`` and its bases, keyed by attribute."""
    machines: dict[str, StateMachine] = {}
    for klass in reversed(owner.__mro__):
        machines.update(klass.__dict__.get(MACHINES_ATTR, {}))
    return machines


def steady_state(
    owner: type,
    attr_name: str,
    build: Builder | None = None,
    *,
    predicates: bool | None = None,
    states_getter: bool | str | None = None,
    scopes: bool | dict[str, Any] | ScopeOptions | None = None,
    strict: bool | None = None,
) -> Any:
    """Turn ``owner.<attr_name>`` into a state machine attribute.

    ``build`` receives the new ``StateMachine`` and declares its states, or
    is a ``MachineDefinition``. Without ``build`` a decorator for the builder
    function is returned. Returns the machine.
    """
    if build is None:
        def decorator(func: Callable[[StateMachine], Any]) -> Callable[[StateMachine], Any]:
            steady_state(
                owner,
                attr_name,
                func,
                predicates=predicates,
                states_getter=states_getter,
                scopes=scopes,
                strict=strict,
            )
            return func

        return decorator

    if isinstance(build, MachineDefinition):
        definition_options = build.options()
        predicates = definition_options["predicates"] if predicates is None else predicates
        states_getter = (
            definition_options["states_getter"] if states_getter is None else states_getter
        )
        scopes = definition_options["scopes"] if scopes is None else scopes
        strict = definition_options["strict"] if strict is None else strict

    options = DeclarationOptions.resolve(
        owner,
        predicates=predicates,
        states_getter=states_getter,
        scopes=scopes,
        strict=strict,
    )

    machine = StateMachine(strict=options.strict)
    if isinstance(build, MachineDefinition):
        build.build(machine)
    else:
        build(machine)

    interceptor = StateAttribute(attr_name, machine, resolve_field_access(owner, attr_name))
    setattr(owner, attr_name, interceptor)

    machines = owner.__dict__.get(MACHINES_ATTR)
    if machines is None:
        machines = {}
        setattr(owner, MACHINES_ATTR, machines)
    previous = machines.get(attr_name)
    if previous is not None:
        _remove_predicates(owner, attr_name, previous)
    machines[attr_name] = machine

    if options.predicates:
        for name, label in machine.predicates().items():
            setattr(owner, name, _make_predicate(attr_name, label, name))

    if options.states_getter:
        getter_name = (
            options.states_getter
            if isinstance(options.states_getter, str)
            else pluralize(attr_name)
        )
        setattr(owner, getter_name, StatesGetter(machine))

    if options.scopes is not None:
        if supports_query_filters(owner):
            for label in machine:
                owner.scope(options.scopes.filter_name(attr_name, label), _make_filter(attr_name, label))
        else:
            logger.debug("%s cannot register query filters; skipping scopes", owner.__name__)

    register_validator(owner, TransitionValidator(attr_name, interceptor))
    register_validator(owner, InclusionValidator(attr_name, machine.states))

    logger.debug(
        "Declared state machine %s.%s with states %s",
        owner.__name__,
        attr_name,
        machine.states,
    )
    return machine


def steady_state_from(owner: type, definition: MachineDefinition, **overrides: Any) -> StateMachine:
    return steady_state(owner, definition.attribute, definition, **overrides)
