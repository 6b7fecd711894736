"""Todo repository: stores API todos through the database service."""

from __future__ import annotations

from typing import Protocol

from todo_api.entity import TodoEntity
from todo_api.mapper import TodoMapper
from todo_api.model import Todo


class _TodoStore(Protocol):
    def create_todo(self, todo: TodoEntity) -> TodoEntity: ...

    def get_todo(self, todo_name: str) -> TodoEntity: ...

    def get_all_todos(self) -> list[TodoEntity]: ...

    def update_todo(self, todo: TodoEntity) -> None: ...

    def delete_todo(self, todo_name: str) -> None: ...


class TodoRepository:
    """Translates between API todos and stored todos."""

    def __init__(self, db: _TodoStore, mapper: TodoMapper | None = None) -> None:
        self.db = db
        self.mapper = mapper or TodoMapper()

    def create_todo(self, todo: Todo) -> Todo:
        """Store a todo and return it as stored."""
        created = self.db.create_todo(self.mapper.to_entity(todo))
        return self.mapper.to_model(created)

    def get_todo(self, todo_name: str) -> Todo:
        """Return the todo with the given name."""
        return self.mapper.to_model(self.db.get_todo(todo_name))

    def get_all_todos(self) -> list[Todo]:
        """Return every stored todo."""
        return [self.mapper.to_model(entity) for entity in self.db.get_all_todos()]

    def update_todo(self, todo: Todo) -> None:
        """Update the stored todo with ``todo.id``."""
        self.db.update_todo(self.mapper.to_entity(todo))

    def delete_todo(self, todo_name: str) -> None:
        """Delete the todo with the given name."""
        self.db.delete_todo(todo_name)