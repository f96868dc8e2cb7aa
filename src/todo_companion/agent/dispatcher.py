# src/todo_companion/agent/dispatcher.py

"""
Turns one raw model reply into an outcome.

A reply is a JSON object of one of two shapes:
- {"response": "..."}                -> show the text, store untouched
- {"action": "<tool>", "input": ...} -> run the tool, feed the result back

Tool results and tool errors are appended to the conversation as user-role
messages so the model can narrate or correct them on the next turn. Nothing
in here raises for bad model output: every problem becomes a TurnOutcome.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Union

from ..core.ports import TodoRepo
from ..errors import InvalidReplyError, ToolArgumentError, UnknownToolError
from ..todos.tools import ToolCall, execute_tool, parse_tool_call
from .conversation import Conversation
from .prompts import CLARIFY_MESSAGE, INVALID_REPLY_NOTE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Respond:
    text: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    payload: dict[str, Any]


Reply = Union[Respond, Unrecognized, ToolCall]


class OutcomeKind(StrEnum):
    RESPONSE = "response"
    TOOL_RESULT = "tool_result"
    TOOL_ERROR = "tool_error"
    UNKNOWN_ACTION = "unknown_action"
    UNRECOGNIZED = "unrecognized"
    INVALID_REPLY = "invalid_reply"
    LLM_ERROR = "llm_error"


@dataclass(slots=True)
class TurnOutcome:
    kind: OutcomeKind
    text: str
    action: str | None = None
    result: Any = None

    @property
    def is_error(self) -> bool:
        return self.kind in (
            OutcomeKind.TOOL_ERROR,
            OutcomeKind.UNKNOWN_ACTION,
            OutcomeKind.INVALID_REPLY,
            OutcomeKind.LLM_ERROR,
        )


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_reply(raw: str) -> Reply:
    """
    Parse the model's raw text into a Reply.

    Raises:
        InvalidReplyError: not JSON, or JSON but not an object.
        UnknownToolError: `action` names no known tool.
        ToolArgumentError: the tool exists but `input` does not fit it.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise InvalidReplyError(raw, str(e)) from e

    if not isinstance(data, dict):
        raise InvalidReplyError(raw, f"expected an object, got {type(data).__name__}")

    response = data.get("response")
    if response:
        return Respond(text=_to_text(response))

    action = data.get("action")
    if action:
        if not isinstance(action, str):
            raise UnknownToolError(_to_text(action))
        return parse_tool_call(action, data.get("input", ""))

    return Unrecognized(payload=data)


def dispatch(
    raw: str,
    store: TodoRepo,
    conversation: Conversation,
    *,
    keep_invalid_replies: bool = True,
) -> TurnOutcome:
    """
    Handle one model reply. The raw reply is expected to be in the conversation already.
    """
    try:
        reply = parse_reply(raw)
    except InvalidReplyError as e:
        logger.info("Invalid model reply (%s): %.200r", e.detail, raw)
        if keep_invalid_replies:
            conversation.add_user(INVALID_REPLY_NOTE)
        return TurnOutcome(OutcomeKind.INVALID_REPLY, str(e))
    except UnknownToolError as e:
        logger.info("Model asked for unknown function %r", e.name)
        return TurnOutcome(OutcomeKind.UNKNOWN_ACTION, str(e), action=e.name)
    except ToolArgumentError as e:
        logger.info("Rejected arguments for %s: %s", e.name, e.detail)
        conversation.add_user(f"Function {e.name} error: {e}")
        return TurnOutcome(OutcomeKind.TOOL_ERROR, str(e), action=e.name)

    if isinstance(reply, Respond):
        return TurnOutcome(OutcomeKind.RESPONSE, reply.text)

    if isinstance(reply, Unrecognized):
        logger.debug("Reply has neither response nor action: %r", reply.payload)
        return TurnOutcome(OutcomeKind.UNRECOGNIZED, CLARIFY_MESSAGE)

    name = reply.name
    logger.debug("AI action: %s %r", name, reply)

    try:
        result = execute_tool(reply, store)
    except Exception as e:
        logger.info("Function %s failed: %s", name, e, exc_info=True)
        conversation.add_user(f"Function {name} error: {e}")
        return TurnOutcome(OutcomeKind.TOOL_ERROR, str(e), action=name)

    serialized = json.dumps(result, ensure_ascii=False)
    conversation.add_user(f"Function {name} returned: {serialized}")
    logger.info("Function %s ok", name)
    return TurnOutcome(OutcomeKind.TOOL_RESULT, serialized, action=name, result=result)
