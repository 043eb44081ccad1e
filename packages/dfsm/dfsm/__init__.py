"""dfsm - A small deterministic finite state machine engine."""
from __future__ import annotations

from dfsm.definition import Definition
from dfsm.machine import StateMachine
from dfsm.types import (
    DFSMError,
    InvalidDefinitionError,
    NoTransitionsFromStateError,
    Signal,
    State,
    UnacceptedSignalError,
)

__all__ = [
    "Definition",
    "StateMachine",
    "State",
    "Signal",
    "DFSMError",
    "InvalidDefinitionError",
    "NoTransitionsFromStateError",
    "UnacceptedSignalError",
]
