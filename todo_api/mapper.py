"""Conversion between API todos and stored todos."""

from __future__ import annotations

from todo_api.entity import TodoEntity
from todo_api.model import Todo


class TodoMapper:
    """Maps todos between the API model and the storage entity."""

    def to_model(self, entity: TodoEntity) -> Todo:
        """Return the API model for a stored todo."""
        return Todo(id=entity.id, name=entity.name, description=entity.description)

    def to_entity(self, todo: Todo) -> TodoEntity:
        """Return the storage entity for an API todo."""
        return TodoEntity(id=todo.id, name=todo.name, description=todo.description)