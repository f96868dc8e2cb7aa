# src/todo_companion/errors.py

from __future__ import annotations


class ActionError(Exception):
    """The model produced a reply that cannot be turned into an action."""


class InvalidReplyError(ActionError):
    def __init__(self, raw: str, detail: str) -> None:
        super().__init__(f"Model reply is not a JSON object: {detail}")
        self.raw = raw
        self.detail = detail


class UnknownToolError(ActionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Function {name} not found")
        self.name = name


class ToolArgumentError(ActionError):
    def __init__(self, name: str, detail: str) -> None:
        super().__init__(f"The argument validation failed for the function call to {name}: {detail}")
        self.name = name
        self.detail = detail


class LLMError(RuntimeError):
    """Transport or configuration failure while talking to the model endpoint."""
