# tests/test_dispatcher.py

from __future__ import annotations

import json

import pytest

from todo_companion.agent.dispatcher import (
    OutcomeKind,
    Respond,
    Unrecognized,
    dispatch,
    parse_reply,
)
from todo_companion.agent.prompts import CLARIFY_MESSAGE, INVALID_REPLY_NOTE
from todo_companion.errors import InvalidReplyError
from todo_companion.todos.tools import UpdateTodoText


def test_parse_reply_shapes() -> None:
    assert parse_reply('{"response": "hi"}') == Respond(text="hi")
    assert parse_reply('{"action": "updateTodoText", "input": "2, Buy Milk"}') == UpdateTodoText(
        id=2, text="Buy Milk"
    )
    assert parse_reply('{"foo": 1}') == Unrecognized(payload={"foo": 1})


def test_parse_reply_prefers_response_over_action() -> None:
    reply = parse_reply('{"response": "done", "action": "deleteAllTodos"}')
    assert reply == Respond(text="done")


def test_empty_response_falls_through_to_action() -> None:
    reply = parse_reply('{"response": "", "action": "getAllTodos", "input": ""}')
    assert not isinstance(reply, Respond)


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"just a string"', ""])
def test_parse_reply_rejects_non_objects(raw) -> None:
    with pytest.raises(InvalidReplyError):
        parse_reply(raw)


def test_response_does_not_touch_store_or_conversation(store, conversation) -> None:
    store.create("keep")
    before = conversation.messages()

    outcome = dispatch('{"response": "Hi! I can help."}', store, conversation)

    assert outcome.kind == OutcomeKind.RESPONSE
    assert outcome.text == "Hi! I can help."
    assert conversation.messages() == before
    assert [t.todo for t in store.list_all()] == ["keep"]


def test_tool_result_is_fed_back_as_user_message(store, conversation) -> None:
    outcome = dispatch('{"action": "createTodo", "input": "buy milk"}', store, conversation)

    assert outcome.kind == OutcomeKind.TOOL_RESULT
    assert outcome.action == "createTodo"
    new_id = outcome.result
    assert conversation.history[-1] == {
        "role": "user",
        "content": f"Function createTodo returned: {new_id}",
    }

    outcome = dispatch('{"action": "getAllTodos", "input": ""}', store, conversation)
    assert json.loads(outcome.text) == [{"id": new_id, "todo": "buy milk", "status": "pending"}]
    assert conversation.history[-1]["content"].startswith("Function getAllTodos returned: [")


def test_unknown_action_is_reported_and_changes_nothing(store, conversation) -> None:
    store.create("keep")
    before = conversation.messages()

    outcome = dispatch('{"action": "unknownFn", "input": ""}', store, conversation)

    assert outcome.kind == OutcomeKind.UNKNOWN_ACTION
    assert outcome.is_error
    assert "unknownFn" in outcome.text
    assert conversation.messages() == before
    assert [t.todo for t in store.list_all()] == ["keep"]


def test_bad_arguments_become_a_correctable_error(store, conversation) -> None:
    outcome = dispatch('{"action": "deleteTodoById", "input": "first"}', store, conversation)

    assert outcome.kind == OutcomeKind.TOOL_ERROR
    last = conversation.history[-1]
    assert last["role"] == "user"
    assert last["content"].startswith("Function deleteTodoById error:")


def test_store_failure_becomes_a_correctable_error(conversation) -> None:
    class BrokenStore:
        def delete_all(self) -> str:
            raise RuntimeError("disk on fire")

    outcome = dispatch('{"action": "deleteAllTodos"}', BrokenStore(), conversation)

    assert outcome.kind == OutcomeKind.TOOL_ERROR
    assert outcome.text == "disk on fire"
    assert conversation.history[-1]["content"] == "Function deleteAllTodos error: disk on fire"


def test_update_text_with_padding(store, conversation) -> None:
    store.create("one")
    second = store.create("two")

    outcome = dispatch(
        json.dumps({"action": "updateTodoText", "input": f"  {second} ,  Buy Milk  "}),
        store,
        conversation,
    )

    assert outcome.kind == OutcomeKind.TOOL_RESULT
    assert [t.todo for t in store.list_all()] == ["one", "Buy Milk"]


def test_neither_field_asks_for_clarification(store, conversation) -> None:
    before = conversation.messages()
    outcome = dispatch('{"thought": "hmm"}', store, conversation)

    assert outcome.kind == OutcomeKind.UNRECOGNIZED
    assert outcome.text == CLARIFY_MESSAGE
    assert conversation.messages() == before


def test_invalid_json_appends_corrective_note(store, conversation) -> None:
    outcome = dispatch("Sure! Here are your todos", store, conversation)

    assert outcome.kind == OutcomeKind.INVALID_REPLY
    assert conversation.history[-1] == {"role": "user", "content": INVALID_REPLY_NOTE}


def test_invalid_json_can_be_dropped_silently(store, conversation) -> None:
    before = conversation.messages()
    outcome = dispatch("oops", store, conversation, keep_invalid_replies=False)

    assert outcome.kind == OutcomeKind.INVALID_REPLY
    assert conversation.messages() == before


def test_boolean_id_is_rejected_and_store_untouched(store, conversation) -> None:
    first = store.create("keep me")

    outcome = dispatch('{"action": "deleteTodoById", "input": true}', store, conversation)

    assert outcome.kind == OutcomeKind.TOOL_ERROR
    assert [t.id for t in store.list_all()] == [first]


@pytest.mark.parametrize("falsy", ["false", "0", "null", "[]"])
def test_falsy_response_falls_through_to_action(falsy) -> None:
    reply = parse_reply(f'{{"response": {falsy}, "action": "getAllTodos", "input": ""}}')
    assert not isinstance(reply, Respond)
