import pytest

from todo_api.entity import TodoEntity
from todo_api.mapper import TodoMapper
from todo_api.model import Todo
from todo_api.repository import TodoRepository


class FakeDatabase:
    """In-memory stand-in for the database service."""

    def __init__(self, todos=None):
        self.todos = todos

    def _index(self, name):
        return next(
            (i for i, todo in enumerate(self.todos or []) if todo.name == name), -1
        )

    def create_todo(self, todo):
        if self.todos is None:
            self.todos = []
        self.todos.append(todo)
        return todo

    def get_todo(self, todo_name):
        index = self._index(todo_name)
        if index == -1:
            raise LookupError("could not find todo with name: " + todo_name)
        return self.todos[index]

    def get_all_todos(self):
        if self.todos is None:
            raise LookupError("could not find todos")
        return self.todos

    def update_todo(self, todo):
        for i, old in enumerate(self.todos or []):
            if old.id == todo.id:
                self.todos[i] = todo
                return
        raise LookupError("could not find todo with name: " + todo.name)

    def delete_todo(self, todo_name):
        index = self._index(todo_name)
        if index == -1:
            raise LookupError("could not find todo with name: " + todo_name)
        del self.todos[index]


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def repository(db):
    return TodoRepository(db, TodoMapper())


def test_create_todo(db, repository):
    todo_model = Todo(name="todo", description="todoDesc")
    created = repository.create_todo(todo_model)
    assert db.todos
    assert created.id == todo_model.id
    assert created.name == todo_model.name
    assert created.description == todo_model.description


def test_get_todo(repository):
    todo_model = Todo(name="todo", description="todoDesc")
    expected = repository.create_todo(todo_model)
    actual = repository.get_todo(todo_model.name)
    assert actual.id == expected.id
    assert actual.name == expected.name
    assert actual.description == expected.description


def test_get_todo_returns_error(repository):
    with pytest.raises(LookupError) as info:
        repository.get_todo("todo")
    assert str(info.value) == "could not find todo with name: todo"


def test_get_all_todos(db, repository):
    db.todos = []
    todo_model1 = Todo(name="todo1", description="todoDesc1")
    todo_model2 = Todo(name="todo2", description="todoDesc2")
    repository.create_todo(todo_model1)
    repository.create_todo(todo_model2)

    all_todos = repository.get_all_todos()

    assert len(all_todos) == len(db.todos)
    assert len(all_todos) == 2
    assert all_todos[0] == todo_model1
    assert all_todos[1] == todo_model2


def test_get_all_todos_returns_error(repository):
    with pytest.raises(LookupError) as info:
        repository.get_all_todos()
    assert str(info.value) == "could not find todos"


def test_update_todo(repository):
    repository.create_todo(Todo(id=0, name="todo", description="todoDesc"))
    updated_model = Todo(id=0, name="updatedTodo", description="updatedTodoDesc")

    repository.update_todo(updated_model)
    updated = repository.get_todo(updated_model.name)

    assert updated.id == updated_model.id
    assert updated.name == updated_model.name
    assert updated.description == updated_model.description


def test_delete_todo(db, repository):
    db.todos = []
    todo_model = Todo(id=0, name="todo", description="todoDesc")
    repository.create_todo(todo_model)
    assert repository.get_all_todos() == [todo_model]

    repository.delete_todo(todo_model.name)

    assert db.todos == []
    assert repository.get_all_todos() == []
    with pytest.raises(LookupError) as info:
        repository.get_todo(todo_model.name)
    assert str(info.value) == "could not find todo with name: todo"


def test_delete_missing_todo_raises(repository):
    with pytest.raises(LookupError) as info:
        repository.delete_todo("missing")
    assert str(info.value) == "could not find todo with name: missing"


def test_create_passes_entity_to_database(db, repository):
    repository.create_todo(Todo(id=5, name="todo", description="todoDesc"))
    assert db.todos == [TodoEntity(5, "todo", "todoDesc")]


def test_default_mapper_is_used(db):
    repo = TodoRepository(db)
    created = repo.create_todo(Todo(name="todo", description="todoDesc"))
    assert created == Todo(name="todo", description="todoDesc")