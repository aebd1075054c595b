from __future__ import annotations

from typing import Any

from steady_state import State, StateAttribute, state_machines, steady_state
from steady_state.attribute import (
    AttributeTracking,
    DescriptorAccess,
    InstanceDictAccess,
    resolve_field_access,
)
from steady_state.machine import StateMachine


def _declare_matter(machine: StateMachine) -> None:
    machine.state("solid", default=True)
    machine.state("liquid", from_="solid")
    machine.state("gas", from_="liquid")


def _make_plain_class() -> type:
    class Matter:
        pass

    steady_state(Matter, "state", _declare_matter)
    return Matter


def test_first_read_seeds_start_state_once() -> None:
    matter = _make_plain_class()
    subject = matter()

    assert subject.__dict__.get("state") is None
    assert subject.state == "solid"
    assert subject.__dict__["state"] == "solid"
    assert subject.state == "solid"


def test_external_clear_does_not_reseed() -> None:
    subject = _make_plain_class()()
    assert subject.state == "solid"

    subject.__dict__["state"] = None
    value = subject.state
    assert value.is_absent is True
    assert not value
    assert str(value) == ""


def test_write_before_read_suppresses_seeding() -> None:
    subject = _make_plain_class()()
    subject.state = None

    assert subject.state.is_absent is True
    assert subject.__dict__["state"] is None


def test_write_to_blank_field_is_not_classified() -> None:
    matter = _make_plain_class()
    attribute = matter.__dict__["state"]
    subject = matter()

    subject.state = "gas"
    assert subject.state == "gas"
    assert attribute.is_pending_invalid(subject) is False


def test_rejected_write_is_stored_and_anchor_tracked() -> None:
    matter = _make_plain_class()
    attribute = matter.__dict__["state"]
    subject = matter()

    subject.state = "gas"
    assert subject.__dict__["state"] == "gas"
    assert attribute.tracking(subject) == AttributeTracking(
        initialized=True,
        last_valid_value=None,
    )

    other = matter()
    assert other.state == "solid"
    other.state = "gas"
    assert other.__dict__["state"] == "gas"
    assert attribute.tracking(other).last_valid_value == "solid"
    assert attribute.is_pending_invalid(other) is True

    other.state = "liquid"
    assert attribute.is_pending_invalid(other) is False
    assert attribute.tracking(other).last_valid_value is None


def test_tracking_is_per_instance() -> None:
    matter = _make_plain_class()
    first, second = matter(), matter()

    first.state
    first.state = "gas"

    assert first.state.is_pending is True
    assert second.state.is_pending is False
    assert second.state.next_values == {"liquid"}


def test_assigning_a_state_value_stores_its_label() -> None:
    subject = _make_plain_class()()
    subject.state = subject.state.machine.new_state("liquid")

    assert type(subject.__dict__["state"]) is str
    assert subject.state == "liquid"


def test_class_level_access_returns_interceptor() -> None:
    matter = _make_plain_class()

    assert isinstance(matter.state, StateAttribute)
    assert state_machines(matter)["state"] is matter.state.machine
    assert matter.state.machine.start == "solid"


def test_class_default_value_is_used_as_raw_value() -> None:
    class Matter:
        state = "liquid"

    steady_state(Matter, "state", _declare_matter)
    subject = Matter()

    assert subject.state == "liquid"
    assert subject.state.previous_values == {"solid"}


def test_property_is_wrapped_as_descriptor_access() -> None:
    class Matter:
        def __init__(self) -> None:
            self.calls: list[str] = []
            self._state: str | None = None

        @property
        def state(self) -> str | None:
            self.calls.append("get")
            return self._state

        @state.setter
        def state(self, value: str | None) -> None:
            self.calls.append(f"set:{value}")
            self._state = value

    assert isinstance(resolve_field_access(Matter, "state"), DescriptorAccess)
    steady_state(Matter, "state", _declare_matter)

    subject = Matter()
    assert subject.state == "solid"
    assert "set:solid" in subject.calls
    assert isinstance(Matter.state, StateAttribute)


def test_subclass_shares_graph_by_reference() -> None:
    matter = _make_plain_class()

    class Ice(matter):
        pass

    assert Ice.state is matter.state
    assert Ice().state == "solid"
    assert state_machines(Ice)["state"] is state_machines(matter)["state"]


def test_redeclaration_in_subclass_layers_over_raw_access() -> None:
    matter = _make_plain_class()

    class Lamp(matter):
        pass

    @steady_state(Lamp, "state")
    def _lamp(machine: StateMachine) -> None:
        machine.state("off", default=True)
        machine.state("on", from_="off")
        machine.state("off", from_="on")

    assert isinstance(resolve_field_access(Lamp, "state"), InstanceDictAccess)
    lamp = Lamp()
    assert lamp.state == "off"
    lamp.state = "on"
    assert lamp.state.is_pending is False
    assert matter().state == "solid"
    assert state_machines(Lamp)["state"] is not state_machines(matter)["state"]


def test_reads_return_fresh_state_values() -> None:
    subject = _make_plain_class()()
    first: Any = subject.state
    second: Any = subject.state

    assert isinstance(first, State)
    assert first is not second
    assert first == second
