"""Database access for todos, backed by SQLite."""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from todo_api.entity import TodoEntity

logger = logging.getLogger(__name__)

DEFAULT_SQL_DIR = Path("internal") / "sql"


class TodoNotFoundError(LookupError):
    """Raised when no todo with the requested name exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"could not find todo with name: {name}")
        self.name = name


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings; ``database`` is the path of the database file."""

    database: str = ""
    password: str = ""
    username: str = ""
    port: str = ""
    host: str = ""
    schema: str = ""

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Read settings from ``BLUEPRINT_DB_*`` variables, loading ``.env`` first."""
        load_dotenv()
        return cls(
            database=os.getenv("BLUEPRINT_DB_DATABASE", ""),
            password=os.getenv("BLUEPRINT_DB_PASSWORD", ""),
            username=os.getenv("BLUEPRINT_DB_USERNAME", ""),
            port=os.getenv("BLUEPRINT_DB_PORT", ""),
            host=os.getenv("BLUEPRINT_DB_HOST", ""),
            schema=os.getenv("BLUEPRINT_DB_SCHEMA", ""),
        )

    @property
    def path(self) -> str:
        return self.database or ":memory:"


def _trim(value: float) -> str:
    return f"{value:.9f}".rstrip("0").rstrip(".")


def _format_duration(ns: int) -> str:
    """Format nanoseconds the way durations are conventionally printed (``1m2.5s``)."""
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_trim(ns / 1e3)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{_trim(ns / 1e6)}ms"
    hours, rest = divmod(ns, 3600 * 10**9)
    minutes, rest = divmod(rest, 60 * 10**9)
    seconds = _trim(rest / 1e9) or "0"
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{seconds}s"


@dataclass(frozen=True)
class _PoolStats:
    open_connections: int
    in_use: int
    idle: int
    wait_count: int
    wait_duration_ns: int
    max_idle_closed: int = 0
    max_lifetime_closed: int = 0


def _health_message(stats: _PoolStats) -> str:
    message = "It's healthy"
    if stats.open_connections > 40:
        message = "The database is experiencing heavy load."
    if stats.wait_count > 1000:
        message = (
            "The database has a high number of wait events, "
            "indicating potential bottlenecks."
        )
    if stats.max_idle_closed > stats.open_connections // 2:
        message = (
            "Many idle connections are being closed, "
            "consider revising the connection pool settings."
        )
    if stats.max_lifetime_closed > stats.open_connections // 2:
        message = (
            "Many connections are being closed due to max lifetime, "
            "consider increasing max lifetime or revising the connection usage pattern."
        )
    return message


class DatabaseService:
    """Holds the database connection and runs todo queries on it."""

    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings
        self._connection = sqlite3.connect(settings.path, check_same_thread=False)
        self._lock = threading.Lock()
        self._open = True
        self._in_use = False
        self._wait_count = 0
        self._wait_ns = 0

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if not self._lock.acquire(blocking=False):
            started = time.perf_counter_ns()
            self._lock.acquire()
            self._wait_count += 1
            self._wait_ns += time.perf_counter_ns() - started
        self._in_use = True
        try:
            yield self._connection
        finally:
            self._in_use = False
            self._lock.release()

    def initialize_db(self, sql_dir: str | os.PathLike[str] = DEFAULT_SQL_DIR) -> None:
        """Run every file in ``sql_dir`` as a script, in name order."""
        files = sorted(Path(sql_dir).iterdir(), key=lambda entry: entry.name)
        if not files:
            logger.info("No migration files found.")
            return
        for file in files:
            script = file.read_text()
            with self._connect() as connection:
                connection.executescript(script)

    def _stats(self) -> _PoolStats:
        open_connections = 1 if self._open else 0
        in_use = 1 if self._in_use else 0
        return _PoolStats(
            open_connections=open_connections,
            in_use=in_use,
            idle=open_connections - in_use,
            wait_count=self._wait_count,
            wait_duration_ns=self._wait_ns,
        )

    def health(self) -> dict[str, str]:
        """Ping the database and report connection statistics.

        A failed ping is logged and its error re-raised.
        """
        try:
            with self._connect() as connection:
                connection.execute("SELECT 1").fetchone()
        except sqlite3.Error as exc:
            logger.critical("db down: %s", exc)
            raise

        stats = self._stats()
        return {
            "status": "up",
            "message": _health_message(stats),
            "open_connections": str(stats.open_connections),
            "in_use": str(stats.in_use),
            "idle": str(stats.idle),
            "wait_count": str(stats.wait_count),
            "wait_duration": _format_duration(stats.wait_duration_ns),
            "max_idle_closed": str(stats.max_idle_closed),
            "max_lifetime_closed": str(stats.max_lifetime_closed),
        }

    def close(self) -> None:
        """Close the connection."""
        logger.info("Disconnected from database: %s", self.settings.database)
        with self._lock:
            self._connection.close()
            self._open = False

    def create_todo(self, todo: TodoEntity) -> TodoEntity:
        """Insert a todo and return it with its assigned id."""
        with self._connect() as connection, connection:
            cursor = connection.execute(
                "INSERT INTO todo (name, description) VALUES (?, ?)",
                (todo.name, todo.description),
            )
            new_id = cursor.lastrowid
        return replace(todo, id=new_id)

    def get_todo(self, todo_name: str) -> TodoEntity:
        """Return the todo with the given name."""
        with self._connect() as connection:
            row = connection.execute(
                "SELECT id, name, description FROM todo WHERE name = ?", (todo_name,)
            ).fetchone()
        if row is None:
            raise TodoNotFoundError(todo_name)
        return TodoEntity(*row)

    def get_all_todos(self) -> list[TodoEntity]:
        """Return every stored todo."""
        with self._connect() as connection:
            rows = connection.execute("SELECT id, name, description FROM todo").fetchall()
        return [TodoEntity(*row) for row in rows]

    def update_todo(self, todo: TodoEntity) -> None:
        """Set the name and description of the todo with ``todo.id``."""
        with self._connect() as connection, connection:
            connection.execute(
                "UPDATE todo SET name = ?, description = ? WHERE id = ?",
                (todo.name, todo.description, todo.id),
            )

    def delete_todo(self, todo_name: str) -> None:
        """Delete the todos with the given name."""
        with self._connect() as connection, connection:
            connection.execute("DELETE FROM todo WHERE name = ?", (todo_name,))


_instance: DatabaseService | None = None


def get_database(settings: DatabaseSettings | None = None) -> DatabaseService:
    """Return the shared database service, creating it on first use."""
    global _instance
    if _instance is None:
        _instance = DatabaseService(settings or DatabaseSettings.from_env())
    return _instance