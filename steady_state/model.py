from __future__ import annotations

from typing import Any

from .attribute.declaration import Builder, state_machines, steady_state
from .machine.graph import StateMachine
from .validation.model import ValidatedModel


class StatefulModel(ValidatedModel):
    """Model base exposing the declaration API as class methods.

    Example::

        class Matter(StatefulModel):
            pass

        @Matter.steady_state("state")
        def _matter_states(machine):
            machine.state("solid", default=True)
            machine.state("liquid", from_="solid")
    """

    @classmethod
    def steady_state(cls, attr_name: str, build: Builder | None = None, **options: Any) -> Any:
        return steady_state(cls, attr_name, build, **options)

    @classmethod
    def state_machines(cls) -> dict[str, StateMachine]:
        return state_machines(cls)
