# src/todo_companion/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
import openai
from openai import OpenAI

from ..core.ports import ChatMessage
from ..errors import LLMError

logger = logging.getLogger(__name__)

JSON_OBJECT_FORMAT: dict[str, str] = {"type": "json_object"}

_BAD_MODEL_COOLDOWN_SECONDS = 3600.0


def _is_auth_error(exc: Exception) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_rate_limit_error(exc: Exception) -> bool:
    return isinstance(exc, openai.RateLimitError)


def _is_connection_error(exc: Exception) -> bool:
    # APITimeoutError is a subclass of APIConnectionError.
    return isinstance(exc, (openai.APIConnectionError, httpx.TransportError))


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM model list is empty" in msg:
        return "LLM is not configured (no models). Set TODO_LLM_MODELS in .env."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set TODO_LLM_BASE_URL in .env."
    return msg


def _first_content(completion: Any) -> str | None:
    try:
        return completion.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        return None


class OpenAIChatClient:
    """
    Chat client for an OpenAI-compatible endpoint (Ollama by default).

    Every request asks for `response_format={"type": "json_object"}`; the
    content is returned as-is, validating it is the dispatcher's job.

    Models are tried in the configured order:
    - 404 (model not pulled / unknown) -> remember for an hour, try next
    - rate limit / network / timeout   -> try next
    - auth errors                      -> fail fast
    SDK retries are disabled so a dead endpoint fails quickly.
    """

    def __init__(self, settings: Any, *, client: OpenAI | None = None) -> None:
        base_url = str(getattr(settings, "llm_base_url", "") or "")
        if not base_url.strip():
            raise LLMError("LLM base URL is not set. Set TODO_LLM_BASE_URL in your .env.")

        self._models = [m.strip() for m in getattr(settings, "llm_models", []) or [] if m.strip()]
        if not self._models:
            raise LLMError("LLM model list is empty. Set TODO_LLM_MODELS in your .env.")

        self._bad_models: dict[str, float] = {}  # model -> retry_at (monotonic)

        if client is None:
            client = OpenAI(
                base_url=base_url,
                api_key=str(getattr(settings, "llm_api_key", "") or "ollama"),
                timeout=_make_timeout(
                    float(getattr(settings, "llm_connect_timeout", 5.0)),
                    float(getattr(settings, "llm_read_timeout", 120.0)),
                ),
                max_retries=0,
            )
        self._client = client

    @property
    def models(self) -> list[str]:
        return list(self._models)

    def complete_json(self, messages: list[ChatMessage]) -> str:
        last_error: Exception | None = None
        now = time.monotonic()

        for model in self._models:
            retry_at = self._bad_models.get(model)
            if retry_at is not None and retry_at > now:
                continue

            logger.info("LLM: request model=%s messages=%d", model, len(messages))
            t0 = time.monotonic()

            try:
                completion = self._client.chat.completions.create(
                    model=model,
                    messages=messages,  # type: ignore[arg-type]
                    response_format=JSON_OBJECT_FORMAT,  # type: ignore[arg-type]
                )
            except Exception as e:
                last_error = e

                if _is_auth_error(e):
                    raise LLMError("LLM authentication failed. Check TODO_LLM_API_KEY.") from e

                if _is_not_found_error(e):
                    self._bad_models[model] = time.monotonic() + _BAD_MODEL_COOLDOWN_SECONDS
                    logger.info("LLM: model not available (404): %s", model)
                    continue

                if _is_rate_limit_error(e):
                    logger.info("LLM: rate-limited on model=%s, trying next", model)
                    continue

                if _is_connection_error(e):
                    logger.info("LLM: network/timeout error on model=%s, trying next", model)
                    continue

                logger.info("LLM: error on model=%s (%s), trying next", model, e.__class__.__name__)
                continue

            content = _first_content(completion)
            if content and content.strip():
                logger.debug("LLM: reply from model=%s (%.2fs)", model, time.monotonic() - t0)
                return content

            last_error = LLMError(f"Model returned no content: {model}")
            logger.info("LLM: empty reply from model=%s", model)

        if last_error is not None:
            if _is_rate_limit_error(last_error):
                raise LLMError("LLM is rate-limited. Try again later.") from last_error
            if _is_connection_error(last_error):
                raise LLMError(
                    "LLM network/timeout error. Is the model server running?"
                ) from last_error
            if isinstance(last_error, LLMError):
                raise last_error
            raise LLMError("All LLM models failed.") from last_error

        raise LLMError("All LLM models failed.")
