import threading
from dataclasses import FrozenInstanceError

import pytest

from src.todo import TodoNotFoundError, TodoPatch, TodoStore


def assert_consistent(store: TodoStore) -> None:
    ids = [todo.id for todo in store.get_todos()]
    assert len(ids) == len(set(ids)) == len(store)
    for todo_id in ids:
        assert todo_id in store
        assert store.get_todo(todo_id).id == todo_id
        assert todo_id < store.next_id


def test_todo_store_crud_cycle():
    store = TodoStore()

    todo_id = store.create_todo("Write report", "Quarterly numbers")
    created = store.get_todo(todo_id)
    assert created.name == "Write report"
    assert created.description == "Quarterly numbers"
    assert created.is_completed is False

    assert store.update_todo(todo_id, is_completed=True, description="Sent") is True
    updated = store.get_todo(todo_id)
    assert updated.name == "Write report"
    assert updated.description == "Sent"
    assert updated.is_completed is True

    assert store.delete_todo(todo_id) is True
    assert store.get_todos() == []
    assert_consistent(store)


def test_ids_start_at_zero_and_increase():
    store = TodoStore()
    assert [store.create_todo(f"t{i}", "") for i in range(3)] == [0, 1, 2]
    assert store.next_id == 3


def test_list_follows_creation_order():
    store = TodoStore()
    names = [f"Todo {i}" for i in range(7)]
    ids = [store.create_todo(name, "Description") for name in names]

    todos = store.get_todos(0, None)
    assert [todo.name for todo in todos] == names
    assert [todo.id for todo in todos] == ids


def test_list_with_offset_and_limit():
    store = TodoStore()
    for i in range(5):
        store.create_todo(f"Todo {i}", "")

    assert [t.name for t in store.get_todos(1, 2)] == ["Todo 1", "Todo 2"]
    assert [t.name for t in store.get_todos(3)] == ["Todo 3", "Todo 4"]
    assert [t.name for t in store.get_todos(3, 100)] == ["Todo 3", "Todo 4"]


@pytest.mark.parametrize(
    "offset, limit",
    [(5, None), (5, 1), (50, 10), (0, 0), (2, 0), (-1, None), (-3, 2), (0, -1)],
)
def test_out_of_range_pages_are_empty(offset, limit):
    store = TodoStore()
    for i in range(5):
        store.create_todo(f"Todo {i}", "")

    assert store.get_todos(offset, limit) == []


def test_list_on_empty_store():
    assert TodoStore().get_todos() == []


def test_page_numbers():
    store = TodoStore()
    for i in range(25):
        store.create_todo(f"Paginated Todo {i}", "Description")

    assert len(store.get_todos_page(1, 10)) == 10
    assert len(store.get_todos_page(2, 10)) == 10
    third = store.get_todos_page(3, 10)
    assert [t.name for t in third] == [f"Paginated Todo {i}" for i in range(20, 25)]
    assert store.get_todos_page(4, 10) == []


def test_page_number_defaults():
    store = TodoStore(default_page_size=3)
    for i in range(5):
        store.create_todo(f"Todo {i}", "")

    assert [t.name for t in store.get_todos_page(0)] == ["Todo 0", "Todo 1", "Todo 2"]
    assert [t.name for t in store.get_todos_page(2)] == ["Todo 3", "Todo 4"]


def test_partial_update_only_touches_given_fields():
    store = TodoStore()
    todo_id = store.create_todo("Buy milk", "Two bottles")

    store.update_todo(todo_id, None, None, True)
    first = store.get_todo(todo_id)
    store.update_todo(todo_id, None, None, True)
    second = store.get_todo(todo_id)

    assert first == second
    assert second.name == "Buy milk"
    assert second.description == "Two bottles"
    assert second.is_completed is True


def test_update_accepts_empty_and_false_values():
    store = TodoStore()
    todo_id = store.create_todo("Name", "Description")
    store.update_todo(todo_id, is_completed=True)

    store.update_todo(todo_id, name="", description="", is_completed=False)

    todo = store.get_todo(todo_id)
    assert todo.name == ""
    assert todo.description == ""
    assert todo.is_completed is False


def test_update_without_fields_is_a_no_op():
    store = TodoStore()
    todo_id = store.create_todo("Name", "Description")
    before = store.get_todo(todo_id)

    assert store.update_todo(todo_id) is True
    assert store.get_todo(todo_id) == before


def test_apply_patch():
    store = TodoStore()
    todo_id = store.create_todo("Name", "Description")

    store.apply_patch(todo_id, TodoPatch(name="Renamed"))

    assert store.get_todo(todo_id).name == "Renamed"
    assert TodoPatch().is_empty()
    assert TodoPatch(is_completed=False).changes() == {"is_completed": False}


def test_returned_records_are_immutable():
    store = TodoStore()
    todo_id = store.create_todo("Name", "Description")
    todo = store.get_todo(todo_id)

    with pytest.raises(FrozenInstanceError):
        todo.name = "changed"
    assert store.get_todo(todo_id).name == "Name"


def test_deleted_ids_are_never_reused():
    store = TodoStore()
    first = store.create_todo("First", "")
    second = store.create_todo("Second", "")

    store.delete_todo(second)
    third = store.create_todo("Third", "")

    assert third not in (first, second)
    assert third > second
    with pytest.raises(TodoNotFoundError):
        store.get_todo(second)
    assert [t.name for t in store.get_todos()] == ["First", "Third"]
    assert_consistent(store)


def test_delete_from_middle_keeps_order():
    store = TodoStore()
    ids = [store.create_todo(f"Todo {i}", "") for i in range(4)]

    store.delete_todo(ids[1])

    assert [t.id for t in store.get_todos()] == [ids[0], ids[2], ids[3]]
    assert [t.id for t in store.get_todos(1, 1)] == [ids[2]]


def test_missing_id_fails_without_mutation():
    store = TodoStore()
    todo_id = store.create_todo("Keep", "me")
    before = (store.get_todos(), store.next_id)

    with pytest.raises(TodoNotFoundError) as get_exc:
        store.get_todo(99)
    with pytest.raises(TodoNotFoundError):
        store.update_todo(99, name="x")
    with pytest.raises(TodoNotFoundError):
        store.update_todo(99)
    with pytest.raises(TodoNotFoundError):
        store.delete_todo(99)

    assert get_exc.value.todo_id == 99
    assert "99" in str(get_exc.value)
    assert isinstance(get_exc.value, LookupError)
    assert (store.get_todos(), store.next_id) == before
    assert store.get_todo(todo_id).name == "Keep"


def test_stores_are_independent():
    first = TodoStore()
    second = TodoStore()

    first.create_todo("Only here", "")

    assert len(first) == 1
    assert len(second) == 0
    assert second.create_todo("Other", "") == 0


def test_concurrent_creates_issue_unique_ids():
    store = TodoStore()
    created: list[int] = []
    created_lock = threading.Lock()

    def worker(n: int) -> None:
        for i in range(50):
            todo_id = store.create_todo(f"w{n}-{i}", "")
            with created_lock:
                created.append(todo_id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(created) == len(set(created)) == 400
    assert store.next_id == 400
    assert_consistent(store)


def test_mixed_operation_sequence_keeps_index_consistent():
    store = TodoStore()
    ids = [store.create_todo(f"Todo {i}", "") for i in range(10)]
    for todo_id in ids[::3]:
        store.delete_todo(todo_id)
    for todo_id in ids[1::3]:
        store.update_todo(todo_id, is_completed=True)
    store.create_todo("Late", "")

    assert_consistent(store)
    assert store.get_todos()[-1].name == "Late"
    assert store.next_id == 11
