# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Everything has a local default, so a stock Ollama install with `qwen2.5:3b` pulled
works without any configuration.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Log file level (default: INFO). Console shows warnings only.",
    # LLM (OpenAI-compatible endpoint)
    "TODO_LLM_BASE_URL": "Chat completion endpoint (default: http://localhost:11434/v1).",
    "TODO_LLM_API_KEY": "API key sent to the endpoint (default: ollama; Ollama ignores it).",
    "TODO_LLM_MODELS": "Comma/space separated list of models to try in order (default: qwen2.5:3b).",
    "TODO_LLM_CONNECT_TIMEOUT_SECONDS": "Connect timeout (default: 5).",
    "TODO_LLM_READ_TIMEOUT_SECONDS": "Read timeout; local models can be slow (default: 120).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for the database and log (default: .local/todo).",
    "TODO_DB_PATH": "SQLite database path (default: <data_dir>/todos.sqlite3).",
    # Conversation
    "TODO_MAX_HISTORY_MESSAGES": "Messages kept after the system prompt; 0 = unbounded (default: 40).",
    "TODO_KEEP_INVALID_REPLIES": (
        "Keep non-JSON model replies in history and add a format reminder (default: true)."
    ),
}
