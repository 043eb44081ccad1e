"""Label aliases and the error taxonomy for dfsm."""
from __future__ import annotations

from collections.abc import Hashable

State = Hashable
Signal = Hashable


class DFSMError(Exception):
    """Base class for every error raised by dfsm."""


class InvalidDefinitionError(DFSMError, ValueError):
    """Raised when a definition is internally inconsistent.

    ``problems`` lists every violation found, in discovery order.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("Invalid state machine definition: " + "; ".join(self.problems))


class NoTransitionsFromStateError(DFSMError, KeyError):
    """Raised when the current state has no outgoing transitions at all."""

    def __init__(self, state: State) -> None:
        self.state = state
        super().__init__(f"No transitions are allowed from '{state}'")

    def __str__(self) -> str:
        return self.args[0]


class UnacceptedSignalError(DFSMError, KeyError):
    """Raised when the current state does not accept the given signal."""

    def __init__(self, state: State, signal: Signal) -> None:
        self.state = state
        self.signal = signal
        super().__init__(f"No transition is allowed from '{state}' for '{signal}'")

    def __str__(self) -> str:
        return self.args[0]
