# src/todo_companion/todos/models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TodoStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str) -> TodoStatus:
        """Strict parse for values coming from the model. Raises ValueError."""
        value = str(raw).strip().lower()
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"unknown status {raw!r} (expected one of: {allowed})") from None

    @classmethod
    def from_db(cls, raw: str | None) -> TodoStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING


@dataclass(slots=True)
class Todo:
    id: int
    todo: str
    status: TodoStatus

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "todo": self.todo, "status": self.status.value}
