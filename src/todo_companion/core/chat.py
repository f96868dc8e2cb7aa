# src/todo_companion/core/chat.py

"""
Core chat turn.

This module is transport-agnostic: a connector passes the user's text in and
gets a TurnOutcome back, then decides how to show it.

Turn order:
1. append the user message,
2. send the whole conversation to the model (JSON-object reply requested),
3. append the raw reply as the assistant message,
4. hand the reply to the dispatcher (which may append a tool result).

If the model call fails nothing besides the user message is appended.
"""

from __future__ import annotations

import logging

from ..agent.dispatcher import OutcomeKind, TurnOutcome, dispatch
from ..errors import LLMError
from ..llm.client import friendly_llm_error_message
from .state import AppState

logger = logging.getLogger(__name__)


def run_turn(state: AppState, user_text: str) -> TurnOutcome:
    conversation = state.conversation
    conversation.add_user(user_text)

    try:
        raw = state.llm.complete_json(conversation.messages())
    except LLMError as e:
        msg = friendly_llm_error_message(e)
        logger.info("LLM error: %s", msg)
        return TurnOutcome(OutcomeKind.LLM_ERROR, msg)

    conversation.add_assistant(raw)

    keep_invalid = bool(getattr(state.settings, "keep_invalid_replies", True))
    return dispatch(raw, state.todo_store, conversation, keep_invalid_replies=keep_invalid)
