# src/todo_companion/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..agent.conversation import Conversation
from .ports import LLMClient, TodoRepo


@dataclass
class AppState:
    # Settings are kept on the state so commands and connectors can read them.
    settings: object

    llm: LLMClient
    todo_store: TodoRepo
    conversation: Conversation
