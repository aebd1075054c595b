from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from steady_state.errors import StateMachineDefinitionError

from .graph import StateMachine


class ScopeOptions(BaseModel):
    """``prefix=True`` prefixes filter names with the attribute name, a string
    prefixes them with that token."""

    prefix: bool | str = False

    def filter_name(self, attr_name: str, label: str) -> str:
        if self.prefix is True:
            return f"{attr_name}_{label}"
        if isinstance(self.prefix, str) and self.prefix:
            return f"{self.prefix}_{label}"
        return label


class StateDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    default: bool = False
    from_: list[str] = Field(default_factory=list, alias="from")

    @field_validator("from_", mode="before")
    @classmethod
    def normalize_origins(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class MachineDefinition(BaseModel):
    attribute: str = Field(min_length=1)
    states: list[StateDefinition] = Field(min_length=1)
    predicates: bool | None = None
    states_getter: bool | str | None = None
    scopes: bool | ScopeOptions | None = None
    strict: bool | None = None

    def build(self, machine: StateMachine) -> StateMachine:
        for state in self.states:
            machine.state(state.name, default=state.default, from_=state.from_)
        return machine

    def options(self) -> dict[str, Any]:
        return {
            "predicates": self.predicates,
            "states_getter": self.states_getter,
            "scopes": self.scopes,
            "strict": self.strict,
        }


def parse_definition(payload: dict[str, Any]) -> MachineDefinition:
    try:
        return MachineDefinition.model_validate(payload)
    except ValidationError as exc:
        raise StateMachineDefinitionError(
            f"Invalid state machine definition: {exc.error_count()} error(s)"
        ) from exc


class DefinitionCatalog:
    """State machine definitions read from the ``machines`` list of a YAML file."""

    def __init__(self, catalog_path: str | Path = "state_machines.yaml") -> None:
        self.catalog_path = Path(catalog_path)
        self.definitions: list[MachineDefinition] = []
        self._load_catalog()

    def _load_catalog(self) -> None:
        if not self.catalog_path.exists():
            self.definitions = []
            return

        content = yaml.safe_load(self.catalog_path.read_text(encoding="utf-8")) or {}
        loaded = content.get("machines", []) if isinstance(content, dict) else []
        if not isinstance(loaded, list):
            raise StateMachineDefinitionError(
                f"'machines' must be a list in {self.catalog_path}"
            )
        self.definitions = [parse_definition(item) for item in loaded]

    def get(self, attribute: str) -> MachineDefinition | None:
        for definition in self.definitions:
            if definition.attribute == attribute:
                return definition
        return None

    def attributes(self) -> list[str]:
        return [definition.attribute for definition in self.definitions]
