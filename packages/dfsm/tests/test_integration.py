"""Integration tests driving complete machines through signal streams."""
import threading

import pytest
from dfsm import Definition, NoTransitionsFromStateError, StateMachine, UnacceptedSignalError


DEVICE = {
    "states": ["off", "waiting", "sleeping"],
    "initialState": "off",
    "finalStates": ["off"],
    "transitions": {
        "off": {"turnOn": "waiting"},
        "waiting": {"turnOff": "off", "putToSleep": "sleeping"},
        "sleeping": {"awake": "waiting"},
    },
}


class TestDeviceScenario:
    """The device example: off -> waiting -> sleeping -> waiting -> off."""

    def test_full_cycle(self):
        """Each step lands on the expected state; final only at both ends."""
        # Arrange
        machine = StateMachine(DEVICE)
        signals = ["turnOn", "putToSleep", "awake", "turnOff"]
        expected = ["waiting", "sleeping", "waiting", "off"]
        finals = [machine.is_in_final_state()]

        # Act
        states = []
        for signal in signals:
            machine.process(signal)
            states.append(machine.current_state)
            finals.append(machine.is_in_final_state())

        # Assert
        assert states == expected
        assert finals == [True, False, False, False, True]

    def test_recovers_after_rejected_signal(self):
        """A bad signal mid-run is reported and the run can continue."""
        # Arrange
        machine = StateMachine(DEVICE)
        machine.process("turnOn")

        # Act
        with pytest.raises(UnacceptedSignalError):
            machine.process("turnOn")
        machine.process("turnOff")

        # Assert
        assert machine.current_state == "off"
        assert machine.is_in_final_state() is True


class TestTableProperties:
    """Every defined edge and every missing edge behaves as declared."""

    @pytest.mark.parametrize(
        "source,signal,target",
        [
            (source, signal, target)
            for source, edges in DEVICE["transitions"].items()
            for signal, target in edges.items()
        ],
    )
    def test_every_edge(self, source, signal, target):
        # Arrange - drive the machine to the source state via a known path
        paths = {"off": [], "waiting": ["turnOn"], "sleeping": ["turnOn", "putToSleep"]}
        machine = StateMachine(DEVICE)
        machine.feed(paths[source])
        assert machine.current_state == source

        # Act
        machine.process(signal)

        # Assert
        assert machine.current_state == target

    def test_every_missing_edge(self):
        definition = Definition.from_dict(DEVICE)
        paths = {"off": [], "waiting": ["turnOn"], "sleeping": ["turnOn", "putToSleep"]}
        for state in definition.states:
            for signal in definition.signals - set(definition.targets(state)):
                machine = StateMachine(definition)
                machine.feed(paths[state])
                with pytest.raises(UnacceptedSignalError):
                    machine.process(signal)
                assert machine.current_state == state


class TestTerminalMachine:
    """A machine whose accepting state has no way out."""

    def test_runs_to_stuck_final_state(self):
        # Arrange
        machine = StateMachine(Definition(
            states=["idle", "running", "done"],
            initial_state="idle",
            final_states=["done"],
            transitions={
                "idle": {"start": "running"},
                "running": {"finish": "done", "pause": "idle"},
            },
        ))

        # Act
        visited = machine.feed(["start", "pause", "start", "finish"])

        # Assert
        assert visited == ["running", "idle", "running", "done"]
        assert machine.is_in_final_state() is True
        with pytest.raises(NoTransitionsFromStateError):
            machine.process("start")
        assert machine.current_state == "done"


class TestCallerLocking:
    """Threads sharing a machine serialize process() with their own lock."""

    def test_locked_toggling(self):
        # Arrange
        machine = StateMachine(Definition(
            states=["a", "b"],
            initial_state="a",
            final_states=["a"],
            transitions={"a": {"flip": "b"}, "b": {"flip": "a"}},
        ))
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(250):
                with lock:
                    machine.process("flip")

        # Act
        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Assert - 1000 flips is even, so back to the start
        assert machine.current_state == "a"
