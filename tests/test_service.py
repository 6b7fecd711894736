from unittest.mock import Mock

import pytest

from todo_api.model import Todo
from todo_api.service import TodoService


@pytest.fixture
def repo():
    return Mock()


@pytest.fixture
def service(repo):
    return TodoService(repo)


def test_create_todo(repo, service):
    todo_model = Todo(name="todo", description="todoDesc")
    expected = Todo(id=1, name="todo", description="todoDesc")
    repo.create_todo.return_value = expected

    actual = service.create_todo(todo_model)

    repo.create_todo.assert_called_once_with(todo_model)
    assert actual.id == expected.id
    assert actual.name == expected.name
    assert actual.description == expected.description


def test_create_todo_todo_not_found(repo, service):
    repo.create_todo.side_effect = LookupError("could not find todo")
    with pytest.raises(LookupError) as info:
        service.create_todo(None)
    assert str(info.value) == "could not find todo"


def test_get_todo(repo, service):
    expected = Todo(id=1, name="todo", description="todoDesc")
    repo.get_todo.return_value = expected
    assert service.get_todo("todo") == expected
    repo.get_todo.assert_called_once_with("todo")


def test_get_all_todos(repo, service):
    expected = [Todo(id=1, name="todo1", description="todoDesc1")]
    repo.get_all_todos.return_value = expected
    assert service.get_all_todos() == expected


def test_get_all_todos_propagates_error(repo, service):
    repo.get_all_todos.side_effect = LookupError("could not find todos")
    with pytest.raises(LookupError, match="could not find todos"):
        service.get_all_todos()


def test_update_todo(repo, service):
    todo = Todo(id=1, name="updatedTodo", description="updatedTodoDesc")
    assert service.update_todo(todo) is None
    repo.update_todo.assert_called_once_with(todo)


def test_delete_todo_propagates_error(repo, service):
    repo.delete_todo.side_effect = LookupError("could not find todo with name: todo")
    with pytest.raises(LookupError, match="could not find todo with name: todo"):
        service.delete_todo("todo")
    repo.delete_todo.assert_called_once_with("todo")