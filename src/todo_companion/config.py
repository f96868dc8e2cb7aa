# src/todo_companion/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time: every value has a local-first default
  (Ollama on localhost, SQLite under .local/todo).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- LLM (OpenAI-compatible endpoint, Ollama by default) ----
    llm_base_url: str
    llm_api_key: str
    llm_models: List[str]
    llm_connect_timeout: float
    llm_read_timeout: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    # ---- Conversation ----
    max_history_messages: int
    keep_invalid_replies: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo").strip() or "todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        llm_base_url = _env(_k("LLM_BASE_URL"), "http://localhost:11434/v1")
        # Ollama ignores the key, but the SDK refuses to start without one.
        llm_api_key = _env(_k("LLM_API_KEY"), "ollama")
        llm_models = _env_list(_k("LLM_MODELS"), ["qwen2.5:3b"])
        llm_connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        llm_read_timeout = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 120.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "todos.sqlite3")

        max_history_messages = _env_int(_k("MAX_HISTORY_MESSAGES"), 40)
        keep_invalid_replies = _env_bool(_k("KEEP_INVALID_REPLIES"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            llm_base_url=llm_base_url,
            llm_api_key=llm_api_key,
            llm_models=llm_models,
            llm_connect_timeout=llm_connect_timeout,
            llm_read_timeout=llm_read_timeout,
            data_dir=data_dir,
            db_path=db_path,
            max_history_messages=max_history_messages,
            keep_invalid_replies=keep_invalid_replies,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
