# src/todo_companion/todos/tools.py

"""
Tools the model may call, one pydantic model per tool.

The model addresses a tool by name and passes a single `input` value. Each
tool model knows how to read that value (`from_input`) and validates it once,
here at the boundary. Execution resolves the closed set of tool models with an
exhaustive isinstance chain.
"""

from __future__ import annotations

from typing import Any, ClassVar, Union, assert_never

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from ..core.ports import TodoRepo
from ..errors import ToolArgumentError, UnknownToolError
from .models import TodoStatus


class _Tool(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: ClassVar[str]
    signature: ClassVar[str]
    description: ClassVar[str]

    @classmethod
    def from_input(cls, raw: Any) -> _Tool:
        return cls()


class _TextTool(_Tool):
    text: str

    @classmethod
    def from_input(cls, raw: Any) -> _TextTool:
        return cls.model_validate({"text": raw})


def _split_pair(raw: Any, field: str) -> Any:
    """Turn `"2, Buy Milk"` into `{"id": "2", field: "Buy Milk"}`; objects pass through."""
    if not isinstance(raw, str):
        return raw
    head, sep, tail = raw.partition(",")
    if not sep:
        raise ValueError(f'expected "id, {field}", got {raw!r}')
    return {"id": head.strip(), field: tail.strip()}


class _IdTool(_Tool):
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def strip_id(cls, v: Any) -> Any:
        # JSON true/false would otherwise coerce to 1/0.
        if isinstance(v, bool):
            raise ValueError("id must be an integer")
        return v.strip() if isinstance(v, str) else v


class GetAllTodos(_Tool):
    name = "getAllTodos"
    signature = "getAllTodos()"
    description = "Get all todos"


class CreateTodo(_TextTool):
    name = "createTodo"
    signature = "createTodo(todo)"
    description = "Create new todo"

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("todo text must not be empty")
        return v


class DeleteTodoById(_IdTool):
    name = "deleteTodoById"
    signature = "deleteTodoById(id)"
    description = "Delete todo by ID"

    @classmethod
    def from_input(cls, raw: Any) -> DeleteTodoById:
        if isinstance(raw, dict):
            return cls.model_validate(raw)
        return cls.model_validate({"id": raw})


class SearchTodo(_TextTool):
    name = "searchTodo"
    signature = "searchTodo(search)"
    description = "Search todos"


class DeleteAllTodos(_Tool):
    name = "deleteAllTodos"
    signature = "deleteAllTodos()"
    description = "Delete all todos"


class MarkAllTodosCompleted(_Tool):
    name = "markAllTodosCompleted"
    signature = "markAllTodosCompleted()"
    description = "Mark all todos as completed"


class UpdateTodoStatus(_IdTool):
    name = "updateTodoStatus"
    signature = "updateTodoStatus(id, status)"
    description = "Update todo status by ID (status: pending or completed)"

    status: TodoStatus

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> TodoStatus:
        return TodoStatus.parse(v)

    @classmethod
    def from_input(cls, raw: Any) -> UpdateTodoStatus:
        return cls.model_validate(_split_pair(raw, "status"))


class UpdateTodoText(_IdTool):
    name = "updateTodoText"
    signature = "updateTodoText(id, text)"
    description = "Update todo text by ID"

    text: str

    @field_validator("text")
    @classmethod
    def trimmed(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("todo text must not be empty")
        return v

    @classmethod
    def from_input(cls, raw: Any) -> UpdateTodoText:
        return cls.model_validate(_split_pair(raw, "text"))


ToolCall = Union[
    GetAllTodos,
    CreateTodo,
    DeleteTodoById,
    SearchTodo,
    DeleteAllTodos,
    MarkAllTodosCompleted,
    UpdateTodoStatus,
    UpdateTodoText,
]

TOOLS: dict[str, type[_Tool]] = {
    cls.name: cls
    for cls in (
        GetAllTodos,
        CreateTodo,
        DeleteTodoById,
        SearchTodo,
        DeleteAllTodos,
        MarkAllTodosCompleted,
        UpdateTodoStatus,
        UpdateTodoText,
    )
}


def describe_tools() -> str:
    return "\n".join(f"- {cls.signature}: {cls.description}" for cls in TOOLS.values())


def _format_error(e: ValueError) -> str:
    if isinstance(e, pydantic.ValidationError):
        parts = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err.get("loc", ())) or "input"
            parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
        return "; ".join(parts)
    return str(e)


def parse_tool_call(name: str, raw_input: Any) -> ToolCall:
    """Resolve a tool by name and validate its input. Raises ActionError subclasses."""
    cls = TOOLS.get(name)
    if cls is None:
        raise UnknownToolError(name)
    try:
        return cls.from_input(raw_input)  # type: ignore[return-value]
    except ValueError as e:
        raise ToolArgumentError(name, _format_error(e)) from e


def execute_tool(call: ToolCall, store: TodoRepo) -> Any:
    """Run a validated call against the store. Returns a JSON-serializable value."""
    if isinstance(call, GetAllTodos):
        return [t.to_dict() for t in store.list_all()]
    if isinstance(call, CreateTodo):
        return store.create(call.text)
    if isinstance(call, DeleteTodoById):
        return store.delete_by_id(call.id)
    if isinstance(call, SearchTodo):
        return [t.to_dict() for t in store.search(call.text)]
    if isinstance(call, DeleteAllTodos):
        return store.delete_all()
    if isinstance(call, MarkAllTodosCompleted):
        return store.mark_all_completed()
    if isinstance(call, UpdateTodoStatus):
        return store.update_status(call.id, call.status)
    if isinstance(call, UpdateTodoText):
        return store.update_text(call.id, call.text)
    assert_never(call)
