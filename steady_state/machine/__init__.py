from .definition import (
    DefinitionCatalog,
    MachineDefinition,
    ScopeOptions,
    StateDefinition,
    parse_definition,
)
from .graph import StateMachine, predicate_name
from .state import State, is_blank, label_of

__all__ = [
    "DefinitionCatalog",
    "MachineDefinition",
    "ScopeOptions",
    "State",
    "StateDefinition",
    "StateMachine",
    "is_blank",
    "label_of",
    "parse_definition",
    "predicate_name",
]
