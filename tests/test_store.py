from datetime import datetime, timezone

import pytest

from todo_api.errors import TodoNotFoundError, TodoValidationError
from todo_api.schemas import TodoCreate, TodoUpdate
from todo_api.store import TodoStore


def add(store, title):
    return store.create(TodoCreate(title=title))


class TestCreate:
    def test_new_todo_defaults(self, store):
        todo = add(store, "Buy milk")
        assert todo["id"] == 1
        assert todo["title"] == "Buy milk"
        assert todo["completed"] is False
        assert todo["created_at"].tzinfo == timezone.utc
        assert todo["created_at"] <= datetime.now(timezone.utc)

    def test_title_is_stored_as_sent(self, store):
        assert add(store, "  padded  ")["title"] == "  padded  "

    @pytest.mark.parametrize("title", [None, "", "   ", "\t\n"])
    def test_blank_titles_are_rejected(self, store, title):
        with pytest.raises(TodoValidationError) as exc_info:
            store.create(TodoCreate(title=title))
        assert exc_info.value.message == "Title is required"
        assert exc_info.value.status_code == 400
        assert len(store) == 0

    def test_ids_are_never_reused(self, store):
        ids = [add(store, f"T{i}")["id"] for i in range(5)]
        store.delete(ids[-1])
        store.clear()
        ids.append(add(store, "after clear")["id"])
        assert ids == sorted(set(ids))
        assert ids[-1] == 6


class TestReadAndMutate:
    def test_list_preserves_insertion_order(self, store):
        for title in ["A", "B", "C"]:
            add(store, title)
        assert [t["title"] for t in store.list()] == ["A", "B", "C"]

    def test_returned_entities_are_copies(self, store):
        todo = add(store, "A")
        todo["title"] = "mutated"
        store.list()[0]["completed"] = True
        assert store.get(todo["id"]) == {**todo, "title": "A", "completed": False}

    def test_update_only_when_title_sent(self, store):
        todo = add(store, "A")
        assert store.update(todo["id"], TodoUpdate())["title"] == "A"
        assert store.update(todo["id"], TodoUpdate(title=None))["title"] == "A"
        assert store.update(todo["id"], TodoUpdate(title=""))["title"] == ""

    def test_toggle_twice_restores_state(self, store):
        todo = add(store, "A")
        assert store.toggle(todo["id"])["completed"] is True
        assert store.toggle(todo["id"])["completed"] is False

    def test_delete_middle_keeps_order(self, store):
        a, b, c = (add(store, t) for t in ["A", "B", "C"])
        assert store.delete(b["id"]) == b
        assert [t["id"] for t in store.list()] == [a["id"], c["id"]]

    @pytest.mark.parametrize("op", ["get", "toggle", "delete"])
    def test_unknown_id_raises_not_found(self, store, op):
        add(store, "A")
        with pytest.raises(TodoNotFoundError) as exc_info:
            getattr(store, op)(42)
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Todo not found"
        assert len(store) == 1

    def test_update_unknown_id_raises_not_found(self, store):
        with pytest.raises(TodoNotFoundError):
            store.update(42, TodoUpdate(title="x"))
