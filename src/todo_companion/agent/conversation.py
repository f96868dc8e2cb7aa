# src/todo_companion/agent/conversation.py

from __future__ import annotations

import logging

from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)


class Conversation:
    """
    Ordered chat log sent in full to the model on every turn.

    The system message is fixed at construction. Everything after it is
    append-only and bounded: once the history grows past `max_messages`,
    the oldest entries are dropped. `max_messages <= 0` keeps everything.
    """

    def __init__(self, system_prompt: str, *, max_messages: int = 40) -> None:
        self._system: ChatMessage = {"role": "system", "content": system_prompt}
        self._history: list[ChatMessage] = []
        self.max_messages = max_messages

    @property
    def system_prompt(self) -> str:
        return self._system["content"]

    @property
    def history(self) -> list[ChatMessage]:
        return list(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def messages(self) -> list[ChatMessage]:
        return [dict(self._system), *(dict(m) for m in self._history)]

    def add_user(self, content: str) -> None:
        self._append("user", content)

    def add_assistant(self, content: str) -> None:
        self._append("assistant", content)

    def reset(self) -> None:
        self._history.clear()

    def _append(self, role: str, content: str) -> None:
        self._history.append({"role": role, "content": content})
        if self.max_messages > 0 and len(self._history) > self.max_messages:
            overflow = len(self._history) - self.max_messages
            del self._history[:overflow]
            logger.debug("Conversation trimmed: dropped %d oldest messages", overflow)
