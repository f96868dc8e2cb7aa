# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_companion.agent.conversation import Conversation
from todo_companion.agent.prompts import get_system_prompt
from todo_companion.core.state import AppState
from todo_companion.todos.store import TodoStore

from .fakes import FakeLLMClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="INFO",
        llm_base_url="http://localhost:11434/v1",
        llm_api_key="ollama",
        llm_models=["qwen2.5:3b"],
        llm_connect_timeout=1.0,
        llm_read_timeout=1.0,
        data_dir=tmp_path,
        db_path=tmp_path / "todos.sqlite3",
        max_history_messages=40,
        keep_invalid_replies=True,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TodoStore:
    return TodoStore(settings.db_path)


@pytest.fixture()
def conversation() -> Conversation:
    return Conversation(get_system_prompt(), max_messages=40)


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    store: TodoStore,
    conversation: Conversation,
    llm: FakeLLMClient,
) -> AppState:
    """
    AppState wired with a scripted LLM.

    NOTE: We keep a real SQLite TodoStore here because its behaviour is part
    of what we want to test.
    """
    return AppState(settings=settings, llm=llm, todo_store=store, conversation=conversation)
