# todo-api

A small HTTP service that stores to-do items in a SQLite database and exposes
them as JSON. It is built with Flask and served by the standard library's
WSGI server.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
todo-api
```

The command takes no options besides `--help`; everything is configured
through the environment. A `.env` file in the working directory is loaded on
start-up.

| Variable                | Meaning                                                        |
|-------------------------|----------------------------------------------------------------|
| `PORT`                  | port to listen on (0, i.e. any free port, when unset or not a number) |
| `BLUEPRINT_DB_DATABASE` | path of the SQLite database file; an in-memory database when unset |

On start the server runs every file in `internal/sql` (relative to the
working directory) as an SQL script, in file-name order. That directory must
exist; an empty directory is allowed and only logs
`No migration files found.` The scripts are expected to create the `todo`
table with the columns `id`, `name` and `description`, in that order, for
example:

```sql
CREATE TABLE IF NOT EXISTS todo (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL
);
```

An interrupt (Ctrl+C) or `SIGTERM` shuts the server down gracefully, waiting
up to five seconds for it to stop; a second Ctrl+C forces the process down.

## Endpoints

| Method   | Path           | Result                                                   |
|----------|----------------|----------------------------------------------------------|
| `GET`    | `/`            | `{"message":"Hello World"}`                              |
| `GET`    | `/health`      | database health statistics                               |
| `GET`    | `/todo`        | `{"todos":[...]}`, or `{"todos":null}` when there are none |
| `GET`    | `/todo/<name>` | `{"todo":{...}}` for the item with that name             |
| `POST`   | `/todo`        | creates an item: `201` with `{"todo":{...}}`             |
| `PUT`    | `/todo`        | updates the item with the given `id`: `{"message":"todo updated","todo":{...}}` |
| `DELETE` | `/todo/<name>` | deletes items with that name: `{"message":"deleted todo <name>"}` |

A to-do item looks like this:

```json
{"id":1,"name":"groceries","description":"milk and bread"}
```

`name` and `description` are required, non-empty strings in `POST` and `PUT`
bodies; `id` is optional and defaults to 0. A body that does not bind is
answered with `400` and `{"message":"bad request"}`. Storage failures are
answered with `500`; for `GET /todo/<name>` the body is
`{"error":"<reason>"}`, e.g. `could not find todo with name: <name>`.
Unknown paths and wrong methods get `404` with `404 page not found`.

`/health` reports `status`, `message`, `open_connections`, `in_use`, `idle`,
`wait_count`, `wait_duration`, `max_idle_closed` and `max_lifetime_closed`,
all as strings.

Cross-origin requests are allowed from `http://localhost:5173`, with
credentials, for the methods `GET`, `POST`, `PUT`, `DELETE`, `OPTIONS` and
`PATCH` and the headers `Accept`, `Authorization` and `Content-Type`.
Requests from any other origin are refused with `403`.

## Using the layers directly

```python
from todo_api.database import DatabaseSettings, get_database
from todo_api.mapper import TodoMapper
from todo_api.model import Todo
from todo_api.repository import TodoRepository
from todo_api.service import TodoService

database = get_database(DatabaseSettings(database="todos.db"))
database.initialize_db("migrations")  # directory of .sql files
service = TodoService(TodoRepository(database, TodoMapper()))

created = service.create_todo(Todo.from_json({"name": "groceries", "description": "milk"}))
print(created.to_json())
print([todo.to_json() for todo in service.get_all_todos()])
```

- `Todo.from_json` accepts JSON text, bytes or an already decoded mapping and
  raises `ValidationError` when the body is not a valid to-do.
- `DatabaseService.get_todo` (and so the repository and service) raises
  `TodoNotFoundError` for an unknown name.
- `get_database` returns one shared `DatabaseService`; without settings it
  reads them with `DatabaseSettings.from_env()`.
- `todo_api.server.new_server()` wires these layers together and
  `Server.create_app()` returns the Flask application, which can be served by
  any WSGI server.

## What it does not do

Storage is a single local SQLite database. `DatabaseSettings.from_env()`
also reads `BLUEPRINT_DB_USERNAME`, `BLUEPRINT_DB_PASSWORD`,
`BLUEPRINT_DB_HOST`, `BLUEPRINT_DB_PORT` and `BLUEPRINT_DB_SCHEMA`, but
nothing uses them: the package does not connect to a database server. No
migration scripts are shipped with the package; the `todo` table must be
created by scripts you provide.