# src/todo_companion/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/help, /todos, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases or []:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, parts[1:])

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  quit | exit - leave")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.settings
    models = ", ".join(list(getattr(s, "llm_models", []) or []))
    return (
        "Status:\n"
        f"  Endpoint: {getattr(s, 'llm_base_url', '?')}\n"
        f"  Models (priority -> fallback): {models}\n"
        f"  Database: {getattr(s, 'db_path', '?')}\n"
        f"  Todos: {state.todo_store.count()}\n"
        f"  Conversation: {len(state.conversation)} messages "
        f"(limit {state.conversation.max_messages})"
    )


def cmd_todos(state: AppState, args: list[str]) -> str:
    """
    /todos          -> list all todos
    /todos <text>   -> search todos
    """
    query = " ".join(args).strip()
    todos = state.todo_store.search(query) if query else state.todo_store.list_all()
    if not todos:
        return "No todos found." if query else "No todos yet."
    lines = [f"Todos matching {query!r}:" if query else "Todos:"]
    for t in todos:
        mark = "x" if t.status == "completed" else " "
        lines.append(f"  [{mark}] {t.id}. {t.todo}")
    return "\n".join(lines)


def cmd_reset(state: AppState, args: list[str]) -> str:
    dropped = len(state.conversation)
    state.conversation.reset()
    logger.info("Conversation reset (dropped %d messages)", dropped)
    return "Conversation cleared. Todos are kept."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show endpoint, models and counts.")
registry.register("todos", cmd_todos, help_text="List todos without asking the model: /todos [search].")
registry.register("reset", cmd_reset, help_text="Forget the conversation (keeps todos).")
