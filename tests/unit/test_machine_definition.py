import tempfile
from pathlib import Path

import pytest

from steady_state import StatefulModel, steady_state_from
from steady_state.errors import StateMachineDefinitionError
from steady_state.machine import (
    DefinitionCatalog,
    MachineDefinition,
    ScopeOptions,
    StateMachine,
    parse_definition,
)

_CATALOG = """
machines:
  - attribute: step
    states:
      - name: step-1
        default: true
      - name: step-2
        from: step-1
      - name: cancelled
        from: [step-1, step-2]
  - attribute: car
    predicates: false
    states_getter: vehicle_states
    scopes:
      prefix: automobile
    states:
      - name: driving
        default: true
      - name: parked
        from: driving
"""


def _write_catalog(tmp_dir: str, content: str) -> Path:
    path = Path(tmp_dir) / "state_machines.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_definition_accepts_single_or_multiple_origins() -> None:
    definition = parse_definition(
        {
            "attribute": "step",
            "states": [
                {"name": "step-1", "default": True},
                {"name": "step-2", "from": "step-1"},
                {"name": "cancelled", "from_": ["step-1", "step-2"]},
            ],
        }
    )

    assert definition.states[0].from_ == []
    assert definition.states[1].from_ == ["step-1"]
    assert definition.states[2].from_ == ["step-1", "step-2"]

    machine = definition.build(StateMachine())
    assert machine.start == "step-1"
    assert machine.reachable_from("step-1") == {"step-2", "cancelled"}


def test_invalid_definition_raises_definition_error() -> None:
    with pytest.raises(StateMachineDefinitionError):
        parse_definition({"attribute": "step", "states": []})
    with pytest.raises(StateMachineDefinitionError):
        parse_definition({"attribute": "step", "states": [{"name": ""}]})


def test_scope_options_filter_names() -> None:
    assert ScopeOptions().filter_name("car", "parked") == "parked"
    assert ScopeOptions(prefix=True).filter_name("car", "parked") == "car_parked"
    assert ScopeOptions(prefix="automobile").filter_name("car", "parked") == "automobile_parked"


def test_catalog_loads_definitions_from_yaml() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        catalog = DefinitionCatalog(_write_catalog(tmp_dir, _CATALOG))

    assert catalog.attributes() == ["step", "car"]
    car = catalog.get("car")
    assert car is not None
    assert car.predicates is False
    assert car.states_getter == "vehicle_states"
    assert car.scopes == ScopeOptions(prefix="automobile")
    assert catalog.get("missing") is None


def test_missing_catalog_is_empty() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        catalog = DefinitionCatalog(Path(tmp_dir) / "absent.yaml")
    assert catalog.definitions == []


def test_catalog_with_non_list_machines_is_rejected() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = _write_catalog(tmp_dir, "machines:\n  step: nope\n")
        with pytest.raises(StateMachineDefinitionError):
            DefinitionCatalog(path)


def test_declaring_from_definition_applies_its_options() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        catalog = DefinitionCatalog(_write_catalog(tmp_dir, _CATALOG))

    class Car(StatefulModel):
        registered: dict[str, object] = {}

        @classmethod
        def scope(cls, name: str, query_filter: object) -> None:
            cls.registered[name] = query_filter

    car_definition = catalog.get("car")
    assert isinstance(car_definition, MachineDefinition)
    steady_state_from(Car, car_definition)

    subject = Car()
    assert subject.car == "driving"
    assert not hasattr(subject, "is_driving")
    assert Car.vehicle_states == ["driving", "parked"]
    assert list(Car.registered) == ["automobile_driving", "automobile_parked"]

    subject.car = "parked"
    assert subject.is_valid() is True
