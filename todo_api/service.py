"""Todo service layer used by the HTTP handlers."""

from __future__ import annotations

from todo_api.model import Todo
from todo_api.repository import TodoRepository


class TodoService:
    """Todo operations offered to the web layer."""

    def __init__(self, repository: TodoRepository) -> None:
        self.repository = repository

    def create_todo(self, todo: Todo) -> Todo:
        """Create a todo and return it as stored."""
        return self.repository.create_todo(todo)

    def get_todo(self, todo_name: str) -> Todo:
        """Return the todo with the given name."""
        return self.repository.get_todo(todo_name)

    def get_all_todos(self) -> list[Todo]:
        """Return every todo."""
        return self.repository.get_all_todos()

    def update_todo(self, todo: Todo) -> None:
        """Update an existing todo."""
        self.repository.update_todo(todo)

    def delete_todo(self, todo_name: str) -> None:
        """Delete the todo with the given name."""
        self.repository.delete_todo(todo_name)