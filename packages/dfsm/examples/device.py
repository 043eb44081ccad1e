"""Device modes -- driving a state machine with a fixed signal stream.

Demonstrates:
- Declaring a definition with states, an initial state, and final states
- Feeding signals one at a time and watching the current state
- Checking for a final state before and after the stream

Run: python -m examples.device [--verbose]
"""

import argparse
import logging

from dfsm import Definition, StateMachine

DEVICE = Definition(
    states=("off", "waiting", "sleeping"),
    initial_state="off",
    final_states={"off"},
    transitions={
        "off": {"turnOn": "waiting"},
        "waiting": {"turnOff": "off", "putToSleep": "sleeping"},
        "sleeping": {"awake": "waiting"},
    },
)

SIGNALS = ["turnOn", "putToSleep", "awake", "turnOff"]


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the device state machine demo")
    parser.add_argument("--verbose", action="store_true", help="log engine diagnostics")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    machine = StateMachine(DEVICE)

    print("====================================")
    print(f"original state: '{machine.current_state}' (final: {machine.is_in_final_state()})")
    print("------------------------------------")

    for signal in SIGNALS:
        state = machine.current_state
        machine.process(signal)
        print(f"state '{state}' + signal '{signal}' => state '{machine.current_state}'")

    print("------------------------------------")
    print(f"result state: '{machine.current_state}' (final: {machine.is_in_final_state()})")


if __name__ == "__main__":
    main()
