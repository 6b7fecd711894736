"""HTTP routes and handlers of the todo API."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask, Response, request

from todo_api.database import DatabaseService, get_database
from todo_api.mapper import TodoMapper
from todo_api.model import Todo, ValidationError
from todo_api.repository import TodoRepository
from todo_api.service import TodoService

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = frozenset({"http://localhost:5173"})
ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH")
ALLOWED_HEADERS = ("Accept", "Authorization", "Content-Type")

_JSON_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Todo):
        return value.to_json()
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def _respond(status: int, payload: Mapping[str, Any]) -> Response:
    """Encode a JSON object compactly, with top-level keys in sorted order."""
    ordered = {key: _jsonable(payload[key]) for key in sorted(payload)}
    text = json.dumps(ordered, ensure_ascii=False, separators=(",", ":"))
    return Response(
        text.translate(_JSON_ESCAPES),
        status=status,
        content_type="application/json; charset=utf-8",
    )


def _not_found(_error: Exception) -> Response:
    return Response("404 page not found", status=404, content_type="text/plain")


def _parse_port(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


class Server:
    """The todo web application and the services it is wired to."""

    def __init__(
        self,
        todo_service: TodoService | None = None,
        db: DatabaseService | None = None,
        port: int = 0,
    ) -> None:
        self.todo_service = todo_service
        self.db = db
        self.port = port

    def create_app(self) -> Flask:
        """Build the Flask application with CORS and every route registered."""
        app = Flask(__name__)
        app.before_request(self._cors_gate)
        app.after_request(self._cors_headers)

        app.add_url_rule("/", "hello_world", self._hello_world, methods=["GET"])
        app.add_url_rule("/health", "health", self._health, methods=["GET"])
        app.add_url_rule("/todo/<todo_name>", "get_todo", self._get_todo, methods=["GET"])
        app.add_url_rule("/todo", "get_all_todos", self._get_all_todos, methods=["GET"])
        app.add_url_rule("/todo", "create_todo", self._create_todo, methods=["POST"])
        app.add_url_rule("/todo", "update_todo", self._update_todo, methods=["PUT"])
        app.add_url_rule(
            "/todo/<todo_name>", "delete_todo", self._delete_todo, methods=["DELETE"]
        )

        app.register_error_handler(404, _not_found)
        app.register_error_handler(405, _not_found)
        return app

    # CORS

    @staticmethod
    def _cross_origin() -> str | None:
        origin = request.headers.get("Origin")
        if not origin:
            return None
        if origin in (f"http://{request.host}", f"https://{request.host}"):
            return None
        return origin

    def _cors_gate(self) -> Response | None:
        origin = self._cross_origin()
        if origin is None:
            return None
        if origin not in ALLOWED_ORIGINS:
            return Response(status=403)
        if request.method == "OPTIONS":
            return Response(status=204)
        return None

    def _cors_headers(self, response: Response) -> Response:
        origin = self._cross_origin()
        if origin is None or origin not in ALLOWED_ORIGINS:
            return response
        if request.method == "OPTIONS":
            response.headers["Access-Control-Allow-Methods"] = ",".join(ALLOWED_METHODS)
            response.headers["Access-Control-Allow-Headers"] = ",".join(ALLOWED_HEADERS)
            response.headers.add("Vary", "Origin")
            response.headers.add("Vary", "Access-Control-Request-Method")
            response.headers.add("Vary", "Access-Control-Request-Headers")
        else:
            response.headers.add("Vary", "Origin")
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Origin"] = origin
        return response

    # Handlers

    def _hello_world(self) -> Response:
        return _respond(200, {"message": "Hello World"})

    def _health(self) -> Response:
        return _respond(200, self.db.health())

    def _get_todo(self, todo_name: str) -> Response:
        try:
            todo = self.todo_service.get_todo(todo_name)
        except Exception as exc:  # any storage failure is reported to the client
            logger.error("%s", exc)
            return _respond(500, {"error": str(exc)})
        return _respond(200, {"todo": todo})

    def _create_todo(self) -> Response:
        try:
            todo = Todo.from_json(request.get_data())
        except ValidationError as exc:
            logger.error("%s", exc)
            return _respond(400, {"message": "bad request"})
        try:
            created = self.todo_service.create_todo(todo)
        except Exception as exc:
            logger.error("%s", exc)
            return _respond(500, {"message": "could not create todo"})
        return _respond(201, {"todo": created})

    def _get_all_todos(self) -> Response:
        try:
            todos = self.todo_service.get_all_todos()
        except Exception as exc:
            logger.error("%s", exc)
            return _respond(500, {"message": "could not get todos"})
        return _respond(200, {"todos": todos or None})

    def _update_todo(self) -> Response:
        try:
            todo = Todo.from_json(request.get_data())
        except ValidationError as exc:
            logger.error("%s", exc)
            return _respond(400, {"message": "bad request"})
        try:
            self.todo_service.update_todo(todo)
        except Exception:
            return _respond(500, {"message": "could not update todo"})
        return _respond(200, {"message": "todo updated", "todo": todo})

    def _delete_todo(self, todo_name: str) -> Response:
        try:
            self.todo_service.delete_todo(todo_name)
        except Exception:
            return _respond(500, {"message": "could not delete todo"})
        return _respond(200, {"message": f"deleted todo {todo_name}"})


def new_server() -> Server:
    """Wire the database, repository and service into a server.

    The port comes from ``PORT`` (0 when missing or not a number); the
    database migrations are run before the server is returned.
    """
    load_dotenv()
    port = _parse_port(os.getenv("PORT", ""))
    db = get_database()
    db.initialize_db()
    repository = TodoRepository(db, TodoMapper())
    return Server(TodoService(repository), db=db, port=port)