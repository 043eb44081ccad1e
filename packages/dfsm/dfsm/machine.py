"""StateMachine runtime - tracks the current state against a Definition."""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from dfsm.definition import Definition
from dfsm.types import NoTransitionsFromStateError, Signal, State, UnacceptedSignalError

logger = logging.getLogger(__name__)


def _describe(definition: Definition) -> str:
    """Render a definition as indented JSON, whatever its label types."""
    data = definition.to_dict()
    data["transitions"] = {
        str(source): {str(signal): target for signal, target in edges.items()}
        for source, edges in data["transitions"].items()
    }
    return json.dumps(data, indent=2, default=str)


class StateMachine:
    """Deterministic finite state machine runtime.

    Owns one mutable field, the current state, which only ``process`` changes.
    A failing ``process`` call leaves the current state untouched, so the
    machine stays usable after any error.

    Signals must be hashable; ``process`` and ``can_process`` raise TypeError
    for an unhashable signal, whatever the current state.

    Instances do no locking. A machine shared between threads must be guarded
    by the caller (a ``threading.Lock`` around ``process``, or a single owner).
    """

    def __init__(self, definition: Definition | Mapping[str, Any]) -> None:
        self._definition = Definition.coerce(definition)
        self._current_state: State = self._definition.initial_state
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Initialized state machine.\n%s", _describe(self._definition))

    @property
    def definition(self) -> Definition:
        return self._definition

    @property
    def current_state(self) -> State:
        return self._current_state

    def process(self, signal: Signal) -> None:
        """Advance the current state by one signal.

        Raises NoTransitionsFromStateError if the current state has no
        transitions, or UnacceptedSignalError if it has none for ``signal``.
        """
        hash(signal)  # TypeError for unhashable signals, even from a stuck state
        edges = self._definition.transitions.get(self._current_state)
        if not edges:
            raise NoTransitionsFromStateError(self._current_state)
        if signal not in edges:
            raise UnacceptedSignalError(self._current_state, signal)
        old = self._current_state
        self._current_state = edges[signal]
        logger.debug("state '%s' + signal '%s' => state '%s'", old, signal, self._current_state)

    def is_in_final_state(self) -> bool:
        return self._current_state in self._definition.final_states

    def accepted_signals(self) -> frozenset[Signal]:
        """Signals the current state has a transition for."""
        edges = self._definition.transitions.get(self._current_state)
        return frozenset(edges) if edges else frozenset()

    def can_process(self, signal: Signal) -> bool:
        """Check whether ``process(signal)`` would succeed, without advancing."""
        hash(signal)
        edges = self._definition.transitions.get(self._current_state)
        return bool(edges) and signal in edges

    def feed(self, signals: Iterable[Signal]) -> list[State]:
        """Process signals in order and return the state reached after each.

        The first failing signal propagates its error. Steps before it stay
        applied; the failing step itself changes nothing.
        """
        visited: list[State] = []
        for signal in signals:
            self.process(signal)
            visited.append(self._current_state)
        return visited

    def __repr__(self) -> str:
        return f"StateMachine(current_state={self._current_state!r})"
