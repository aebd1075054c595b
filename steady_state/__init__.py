from .attribute import StateAttribute, state_machines, steady_state, steady_state_from
from .errors import ModelValidationError, StateMachineDefinitionError, SteadyStateError
from .machine import DefinitionCatalog, MachineDefinition, ScopeOptions, State, StateMachine
from .model import StatefulModel
from .validation import Errors, ValidatedModel

__all__ = [
    "DefinitionCatalog",
    "Errors",
    "MachineDefinition",
    "ModelValidationError",
    "ScopeOptions",
    "State",
    "StateAttribute",
    "StateMachine",
    "StateMachineDefinitionError",
    "StatefulModel",
    "SteadyStateError",
    "ValidatedModel",
    "state_machines",
    "steady_state",
    "steady_state_from",
]
