# src/todo_companion/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete LLM client, todo store and conversation into AppState.
"""

from __future__ import annotations

import logging

from ..agent.conversation import Conversation
from ..agent.prompts import get_system_prompt
from ..config import get_settings
from ..core.state import AppState
from ..llm.client import OpenAIChatClient
from ..todos.store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        llm=OpenAIChatClient(settings),
        todo_store=TodoStore(settings.db_path),
        conversation=Conversation(
            get_system_prompt(),
            max_messages=int(getattr(settings, "max_history_messages", 40)),
        ),
    )
    logger.info("State ready models=%s db=%s", settings.llm_models, settings.db_path)
    return state
