# src/todo_companion/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations, so the
model endpoint and the store can be replaced by fakes in tests.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..todos.models import Todo, TodoStatus

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class LLMClient(Protocol):
    """Chat completion client that is asked for a single JSON object per call."""

    def complete_json(self, messages: list[ChatMessage]) -> str: ...


class TodoRepo(Protocol):
    def count(self) -> int: ...
    def list_all(self) -> list[Todo]: ...
    def create(self, text: str) -> int: ...
    def delete_by_id(self, todo_id: int) -> str: ...
    def update_status(self, todo_id: int, status: TodoStatus) -> str: ...
    def delete_all(self) -> str: ...
    def mark_all_completed(self) -> str: ...
    def update_text(self, todo_id: int, text: str) -> str: ...
    def search(self, query: str) -> list[Todo]: ...
