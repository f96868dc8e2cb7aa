# tests/test_commands.py

from __future__ import annotations

from todo_companion.cli.commands import CommandRegistry, registry


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    def handler(state, args):
        seen.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert seen == [["x", "y"], []]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_todos_command_lists_and_searches_without_model(state) -> None:
    assert registry.handle(state, "/todos") == "No todos yet."

    state.todo_store.create("buy milk")
    second = state.todo_store.create("walk dog")
    state.todo_store.update_status(second, "completed")

    listing = registry.handle(state, "/todos") or ""
    assert "[ ] 1. buy milk" in listing
    assert f"[x] {second}. walk dog" in listing

    found = registry.handle(state, "/todos MILK") or ""
    assert "buy milk" in found
    assert "walk dog" not in found

    assert state.llm.calls == []


def test_reset_command_clears_history_but_keeps_system_prompt(state) -> None:
    state.conversation.add_user("hi")
    state.conversation.add_assistant('{"response": "hello"}')

    reply = registry.handle(state, "/reset") or ""

    assert "cleared" in reply
    assert len(state.conversation) == 0
    assert state.conversation.messages()[0]["role"] == "system"


def test_status_command_reports_counts(state) -> None:
    state.todo_store.create("a")
    out = registry.handle(state, "/status") or ""
    assert "Todos: 1" in out
    assert "qwen2.5:3b" in out
