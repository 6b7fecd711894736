from todo_api.entity import TodoEntity
from todo_api.mapper import TodoMapper
from todo_api.model import Todo

mapper = TodoMapper()


def test_to_model():
    entity = TodoEntity(id=0, name="todo", description="todoDesc")
    model = mapper.to_model(entity)
    assert model.id == entity.id
    assert model.name == entity.name
    assert model.description == entity.description


def test_to_entity():
    model = Todo(id=0, name="todo", description="todoDesc")
    entity = mapper.to_entity(model)
    assert entity.id == model.id
    assert entity.name == model.name
    assert entity.description == model.description


def test_round_trip_preserves_values():
    model = Todo(id=12, name="todo", description="todoDesc")
    assert mapper.to_model(mapper.to_entity(model)) == model


def test_results_are_independent_copies():
    entity = TodoEntity(id=1, name="todo", description="todoDesc")
    model = mapper.to_model(entity)
    model.name = "changed"
    assert entity.name == "todo"