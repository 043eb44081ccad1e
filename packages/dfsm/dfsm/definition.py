"""Immutable machine definition with construction-time validation."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from dfsm.types import InvalidDefinitionError, Signal, State

TransitionTable = Mapping[State, Mapping[Signal, State]]


@dataclass(frozen=True)
class Definition:
    """Declarative description of a deterministic finite state machine.

    Attributes:
        states: The state alphabet, in declaration order.
        initial_state: State a new machine starts in.
        final_states: Accepting states queried by ``is_in_final_state``.
        transitions: Maps a state to its ``{signal: target}`` table. A state
            missing from the table, or mapped to an empty table, has no
            outgoing transitions.

    Inputs are copied into immutable containers, so later changes to the
    caller's lists and dicts never reach the definition. Every problem found
    is reported in a single ``InvalidDefinitionError``.
    """

    states: tuple[State, ...]
    initial_state: State
    final_states: frozenset[State]
    transitions: TransitionTable = field(hash=False)

    def __post_init__(self) -> None:
        states = tuple(self.states)
        final_states = frozenset(self.final_states)
        problems: list[str] = []

        if not states:
            problems.append("state alphabet is empty")
        seen: set[State] = set()
        for state in states:
            if state in seen:
                problems.append(f"state '{state}' is declared more than once")
            seen.add(state)

        if self.initial_state not in seen:
            problems.append(f"initial state '{self.initial_state}' is not a declared state")
        for state in final_states:
            if state not in seen:
                problems.append(f"final state '{state}' is not a declared state")

        table: dict[State, Mapping[Signal, State]] = {}
        if not isinstance(self.transitions, Mapping):
            problems.append("transitions must be a mapping of state to {signal: state}")
        else:
            for source, edges in self.transitions.items():
                if source not in seen:
                    problems.append(f"transition source '{source}' is not a declared state")
                if edges is None:
                    edges = {}
                if not isinstance(edges, Mapping):
                    problems.append(f"transitions from '{source}' must be a mapping of signal to state")
                    continue
                for signal, target in edges.items():
                    if target not in seen:
                        problems.append(
                            f"transition '{source}' + '{signal}' targets undeclared state '{target}'"
                        )
                table[source] = MappingProxyType(dict(edges))

        if problems:
            raise InvalidDefinitionError(problems)

        object.__setattr__(self, "states", states)
        object.__setattr__(self, "final_states", final_states)
        object.__setattr__(self, "transitions", MappingProxyType(table))

    @property
    def signals(self) -> frozenset[Signal]:
        """Every signal mentioned anywhere in the transition table."""
        return frozenset(signal for edges in self.transitions.values() for signal in edges)

    def targets(self, state: State) -> Mapping[Signal, State] | None:
        """Return the ``{signal: target}`` table for a state, or None if absent."""
        return self.transitions.get(state)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain lists and dicts."""
        return {
            "states": list(self.states),
            "initial_state": self.initial_state,
            "final_states": [s for s in self.states if s in self.final_states],
            "transitions": {
                source: dict(edges) for source, edges in self.transitions.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Definition:
        """Build a definition from a plain mapping.

        Accepts both ``initial_state``/``final_states`` and the camelCase
        ``initialState``/``finalStates`` spellings. ``transitions`` and the
        final states default to empty.
        """
        if "states" not in data:
            raise InvalidDefinitionError(["missing required key 'states'"])
        if "initial_state" in data:
            initial = data["initial_state"]
        elif "initialState" in data:
            initial = data["initialState"]
        else:
            raise InvalidDefinitionError(["missing required key 'initial_state'"])
        finals = data.get("final_states", data.get("finalStates", ()))
        return cls(
            states=data["states"],
            initial_state=initial,
            final_states=finals,
            transitions=data.get("transitions", {}),
        )

    @classmethod
    def coerce(cls, value: Definition | Mapping[str, Any]) -> Definition:
        """Return ``value`` if it is a Definition, else build one with ``from_dict``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise TypeError(
            f"Expected Definition or mapping, got {type(value).__name__}"
        )
