# src/todo_companion/agent/prompts.py

from __future__ import annotations

from typing import Final

from ..todos.tools import describe_tools

RESPONSE_FORMATS: Final[str] = """
Response formats:
- To call function: {"action": "functionName", "input": "parameter"}
- To respond: {"response": "your message"}

Examples:
User: "show my todos"
Response: {"action": "getAllTodos", "input": ""}

User: "add buy milk"
Response: {"action": "createTodo", "input": "buy milk"}

User: "hello"
Response: {"response": "Hi! I can help manage your todos."}

User: "update todo 2 text to Buy Milk"
Response: {"action": "updateTodoText", "input": "2,Buy Milk"}

User: "mark todo 1 as completed"
Response: {"action": "updateTodoStatus", "input": "1,completed"}

After a function runs you will get a message "Function <name> returned: <json>"
(or "Function <name> error: <details>"). Use it to answer the user with
{"response": "..."} or to correct your call.
""".strip()


def get_system_prompt() -> str:
    return (
        "You are a helpful AI todo assistant. Always respond in valid JSON: "
        "exactly one JSON object per reply.\n\n"
        f"Available functions:\n{describe_tools()}\n\n"
        f"{RESPONSE_FORMATS}"
    )


INVALID_REPLY_NOTE: Final[str] = (
    "Your previous reply was not a valid JSON object. "
    'Reply with exactly one JSON object: {"response": ...} or {"action": ..., "input": ...}.'
)

CLARIFY_MESSAGE: Final[str] = "I'm not sure how to respond to that. Can you rephrase?"
