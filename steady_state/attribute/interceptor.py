"""
Attribute interception for state machine fields.

``StateAttribute`` is a data descriptor placed in front of the raw field
access of one attribute. Reads seed the start state once and return a
``State``; writes are classified against the transition graph and always
stored, so a rejected value stays visible to validation until corrected.
Classification and write are not atomic: callers sharing one instance
across threads must serialize access themselves.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from steady_state.config import get_logger
from steady_state.machine.graph import StateMachine
from steady_state.machine.state import State, is_blank

logger = get_logger(__name__)

TRACKING_ATTR = "_steady_state_tracking"

_MISSING = object()


@dataclass
class AttributeTracking:
    """Per-instance bookkeeping for one state attribute."""

    initialized: bool = False
    last_valid_value: str | None = None


class FieldAccess(ABC):
    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def get(self, obj: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def set(self, obj: Any, value: Any) -> None:
        raise NotImplementedError

    def class_value(self, owner: type) -> Any:
        return None


class InstanceDictAccess(FieldAccess):
    """Plain attribute stored in the instance ``__dict__``."""

    def __init__(self, name: str, default: Any = None) -> None:
        super().__init__(name)
        self.default = default

    def get(self, obj: Any) -> Any:
        return obj.__dict__.get(self.name, self.default)

    def set(self, obj: Any, value: Any) -> None:
        obj.__dict__[self.name] = value


class DescriptorAccess(FieldAccess):
    """Field served by a pre-existing data descriptor (property, ORM column, ...)."""

    def __init__(self, name: str, descriptor: Any) -> None:
        super().__init__(name)
        self.descriptor = descriptor

    def get(self, obj: Any) -> Any:
        return self.descriptor.__get__(obj, type(obj))

    def set(self, obj: Any, value: Any) -> None:
        self.descriptor.__set__(obj, value)

    def class_value(self, owner: type) -> Any:
        if isinstance(self.descriptor, property):
            return None
        return self.descriptor.__get__(None, owner)


def _is_data_descriptor(value: Any) -> bool:
    kind = type(value)
    return hasattr(kind, "__get__") and hasattr(kind, "__set__")


def find_state_attribute(owner: type, name: str) -> StateAttribute | None:
    for klass in owner.__mro__:
        candidate = klass.__dict__.get(name, _MISSING)
        if candidate is _MISSING:
            continue
        return candidate if isinstance(candidate, StateAttribute) else None
    return None


def resolve_field_access(owner: type, name: str) -> FieldAccess:
    """Raw access for ``name`` as currently defined on ``owner``.

    An interceptor installed earlier (for instance on a base class) is
    unwrapped to the raw access it was itself wrapping.
    """
    for klass in owner.__mro__:
        existing = klass.__dict__.get(name, _MISSING)
        if existing is _MISSING:
            continue
        if isinstance(existing, StateAttribute):
            return existing.field
        if _is_data_descriptor(existing):
            return DescriptorAccess(name, existing)
        return InstanceDictAccess(name, default=existing)
    return InstanceDictAccess(name)


class StateAttribute:
    def __init__(self, name: str, machine: StateMachine, field: FieldAccess) -> None:
        self.name = name
        self.machine = machine
        self.field = field

    def tracking(self, obj: Any) -> AttributeTracking:
        records = obj.__dict__.get(TRACKING_ATTR)
        if records is None:
            records = {}
            obj.__dict__[TRACKING_ATTR] = records
        record = records.get(self.name)
        if record is None:
            record = AttributeTracking()
            records[self.name] = record
        return record

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            class_value = self.field.class_value(owner)
            return self if class_value is None else class_value
        return self.read(obj)

    def __set__(self, obj: Any, value: Any) -> None:
        self.write(obj, value)

    def read(self, obj: Any) -> State:
        tracking = self.tracking(obj)
        if not tracking.initialized:
            if is_blank(self.field.get(obj)):
                logger.debug("Seeding %s with start state %r", self.name, self.machine.start)
                self.write(obj, self.machine.start)
            tracking.initialized = True
        return self.machine.new_state(self.field.get(obj), tracking.last_valid_value)

    def write(self, obj: Any, value: Any) -> None:
        tracking = self.tracking(obj)
        tracking.initialized = True

        current = self.read(obj)
        if not is_blank(current):
            if current.may_become(value):
                if tracking.last_valid_value is not None:
                    logger.debug(
                        "Cleared pending transition of %s (anchor %r)",
                        self.name,
                        tracking.last_valid_value,
                    )
                else:
                    logger.debug("Transition of %s: %s -> %s", self.name, current, value)
                tracking.last_valid_value = None
            elif tracking.last_valid_value is None:
                tracking.last_valid_value = current.value
                logger.info("Rejected transition of %s: %s -> %s", self.name, current, value)
            else:
                logger.info(
                    "Rejected transition of %s: %s -> %s (anchor %r kept)",
                    self.name,
                    current,
                    value,
                    tracking.last_valid_value,
                )

        if isinstance(value, State):
            value = value.value
        self.field.set(obj, value)

    def is_pending_invalid(self, obj: Any) -> bool:
        return self.tracking(obj).last_valid_value is not None

    def __repr__(self) -> str:
        return f"StateAttribute({self.name!r}, {self.machine!r})"
