# src/todo_companion/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..agent.dispatcher import OutcomeKind, TurnOutcome
from ..cli.commands import registry as command_registry
from ..core.chat import run_turn
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_WORDS = frozenset({"quit", "exit", "/quit", "/exit"})
PROMPT = ">> "


def _print_outcome(outcome: TurnOutcome) -> None:
    kind = outcome.kind
    if kind == OutcomeKind.RESPONSE:
        print(f"AI: {outcome.text}")
    elif kind == OutcomeKind.TOOL_RESULT:
        print(f"Function result: {outcome.text}")
    elif kind == OutcomeKind.TOOL_ERROR:
        print(f"Function error: {outcome.text}")
    elif kind == OutcomeKind.UNRECOGNIZED:
        print(f"AI: {outcome.text}")
    else:
        print(f"Error: {outcome.text}")


def run_console_loop(state: AppState, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console started.")
    print("Todo assistant. Type your request, /help for commands, quit to leave.")

    while True:
        try:
            user_input = read_line(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print("Goodbye!")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print("\nGoodbye!")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_WORDS:
            logger.info("Console exit command received.")
            print("Goodbye!")
            break

        try:
            cmd_response = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            print(cmd_response)
            continue

        try:
            outcome = run_turn(state, user_input)
        except Exception as e:
            logger.exception("Chat turn crashed.")
            print(f"Error: {e}")
            continue

        _print_outcome(outcome)

    logger.info("Console finished.")
