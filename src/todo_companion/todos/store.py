# src/todo_companion/todos/store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from .models import Todo, TodoStatus

logger = logging.getLogger(__name__)


def _casefold(value: str | None) -> str:
    return (value or "").casefold()


def _like_pattern(text: str) -> str:
    escaped = text.casefold().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class TodoStore:
    """
    SQLite todo store: one `todos` table (id, todo, status).

    Every operation stands alone (no transactions spanning calls) and
    opens its own short-lived connection.
    """

    def __init__(self, db_path: str | Path = "todos.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TodoStore ready db=%s total=%s", self._db_path, self.count())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        # SQLite LOWER() only folds ASCII; search folds both sides in Python.
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    todo TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'pending'
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_todo(row: sqlite3.Row) -> Todo:
        return Todo(
            id=int(row["id"]),
            todo=str(row["todo"] or ""),
            status=TodoStatus.from_db(row["status"]),
        )

    def _execute(self, sql: str, params: tuple = ()) -> int:
        """Run one write statement and return the number of affected rows."""
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount
        finally:
            conn.close()

    # ---- public API ----

    def count(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
            return int(n)
        finally:
            conn.close()

    def list_all(self) -> list[Todo]:
        """All todos. Read failures are logged and reported as an empty list."""
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute("SELECT id, todo, status FROM todos ORDER BY id").fetchall()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Error getting todos db=%s", self._db_path)
            return []
        return [self._row_to_todo(r) for r in rows]

    def create(self, text: str) -> int:
        if not text or not text.strip():
            raise ValueError("todo text is required")

        conn = self._get_conn()
        try:
            cur = conn.execute(
                "INSERT INTO todos(todo, status) VALUES (?, ?)",
                (text.strip(), TodoStatus.PENDING.value),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for todos insert")
            todo_id = int(rowid)
            logger.debug("Todo created id=%s", todo_id)
            return todo_id
        finally:
            conn.close()

    def delete_by_id(self, todo_id: int) -> str:
        n = self._execute("DELETE FROM todos WHERE id = ?", (int(todo_id),))
        logger.debug("Todo delete id=%s rows=%s", todo_id, n)
        return f"Deleted todo {todo_id}"

    def update_status(self, todo_id: int, status: TodoStatus) -> str:
        status = TodoStatus(status)
        n = self._execute("UPDATE todos SET status = ? WHERE id = ?", (status.value, int(todo_id)))
        if n == 0:
            return f"No todo with id {todo_id}"
        return f"Updated todo {todo_id} status to: {status.value}"

    def delete_all(self) -> str:
        n = self._execute("DELETE FROM todos")
        logger.info("Deleted all todos rows=%s", n)
        return "Deleted all todos"

    def mark_all_completed(self) -> str:
        self._execute("UPDATE todos SET status = ?", (TodoStatus.COMPLETED.value,))
        return "Marked all todos as completed"

    def update_text(self, todo_id: int, text: str) -> str:
        if not text or not text.strip():
            raise ValueError("todo text is required")
        n = self._execute("UPDATE todos SET todo = ? WHERE id = ?", (text.strip(), int(todo_id)))
        if n == 0:
            return f"No todo with id {todo_id}"
        return f"Updated todo {todo_id} text to: {text.strip()}"

    def search(self, query: str) -> list[Todo]:
        """Case-insensitive substring search on the todo text."""
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(
                    "SELECT id, todo, status FROM todos "
                    "WHERE casefold(todo) LIKE ? ESCAPE '\\' ORDER BY id",
                    (_like_pattern(query or ""),),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Error searching todos query=%r", query)
            return []
        return [self._row_to_todo(r) for r in rows]
