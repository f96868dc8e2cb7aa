# tests/test_llm_client.py

from __future__ import annotations

import httpx
import openai
import pytest

from todo_companion.errors import LLMError
from todo_companion.llm.client import OpenAIChatClient, friendly_llm_error_message

from .fakes import fake_openai

_REQUEST = httpx.Request("POST", "http://localhost:11434/v1/chat/completions")


def _status_error(cls, status: int):
    response = httpx.Response(status, request=_REQUEST, json={"error": {"message": "x"}})
    return cls("x", response=response, body=None)


def test_requests_json_object_with_full_history(settings) -> None:
    sdk = fake_openai(['{"response": "hi"}'])
    client = OpenAIChatClient(settings, client=sdk)

    messages = [{"role": "system", "content": "s"}, {"role": "user", "content": "hello"}]
    assert client.complete_json(messages) == '{"response": "hi"}'

    (request,) = sdk.chat.completions.requests
    assert request["model"] == "qwen2.5:3b"
    assert request["messages"] == messages
    assert request["response_format"] == {"type": "json_object"}


def test_falls_back_to_next_model(settings) -> None:
    settings.llm_models = ["missing:1b", "qwen2.5:3b"]
    sdk = fake_openai([_status_error(openai.NotFoundError, 404), '{"response": "ok"}'])
    client = OpenAIChatClient(settings, client=sdk)

    assert client.complete_json([]) == '{"response": "ok"}'
    assert [r["model"] for r in sdk.chat.completions.requests] == ["missing:1b", "qwen2.5:3b"]


def test_not_found_model_is_skipped_afterwards(settings) -> None:
    settings.llm_models = ["missing:1b", "qwen2.5:3b"]
    sdk = fake_openai([_status_error(openai.NotFoundError, 404), "{}", "{}"])
    client = OpenAIChatClient(settings, client=sdk)

    client.complete_json([])
    client.complete_json([])

    assert [r["model"] for r in sdk.chat.completions.requests] == [
        "missing:1b",
        "qwen2.5:3b",
        "qwen2.5:3b",
    ]


def test_connection_error_is_wrapped(settings) -> None:
    sdk = fake_openai([openai.APIConnectionError(request=_REQUEST)])
    client = OpenAIChatClient(settings, client=sdk)

    with pytest.raises(LLMError, match="network/timeout"):
        client.complete_json([])


def test_auth_error_fails_fast(settings) -> None:
    settings.llm_models = ["a", "b"]
    sdk = fake_openai([_status_error(openai.AuthenticationError, 401), "{}"])
    client = OpenAIChatClient(settings, client=sdk)

    with pytest.raises(LLMError, match="authentication"):
        client.complete_json([])
    assert len(sdk.chat.completions.requests) == 1


def test_empty_content_is_an_error(settings) -> None:
    sdk = fake_openai([None])
    client = OpenAIChatClient(settings, client=sdk)

    with pytest.raises(LLMError, match="no content"):
        client.complete_json([])


def test_configuration_is_checked_up_front(settings) -> None:
    settings.llm_models = []
    with pytest.raises(LLMError) as exc:
        OpenAIChatClient(settings, client=fake_openai([]))
    assert "TODO_LLM_MODELS" in friendly_llm_error_message(exc.value)
