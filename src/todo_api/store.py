from __future__ import annotations

import logging
from datetime import datetime, timezone
from threading import RLock
from typing import List

from fastapi import Request

from .errors import TodoNotFoundError, TodoValidationError
from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoStore:
    """
    Ordered in-memory todo list with a monotonically increasing id counter.

    One store lives for the lifetime of the application that owns it. Every
    operation is a linear scan over the list, which keeps insertion order as
    list order. Entities handed out are copies, so callers cannot mutate the
    stored records.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: List[TodoEntity] = []
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def _index_of(self, todo_id: int) -> int:
        for index, item in enumerate(self._items):
            if item["id"] == todo_id:
                return index
        raise TodoNotFoundError()

    def list(self) -> List[TodoEntity]:
        """Return copies of all todos in insertion order."""
        with self._lock:
            return [t.copy() for t in self._items]

    def get(self, todo_id: int) -> TodoEntity:
        with self._lock:
            return self._items[self._index_of(todo_id)].copy()

    def create(self, data: TodoCreate) -> TodoEntity:
        """
        Append a new, not yet completed todo.

        Raises:
            TodoValidationError: if the title is missing or blank after trimming.
        """
        if data.title is None or data.title.strip() == "":
            raise TodoValidationError("Title is required")

        with self._lock:
            entity: TodoEntity = {
                "id": self._allocate_id(),
                "title": data.title,
                "completed": False,
                "created_at": self._now(),
            }
            self._items.append(entity)
        logger.info("Created todo %s", entity["id"])
        return entity.copy()

    def update(self, todo_id: int, data: TodoUpdate) -> TodoEntity:
        """
        Overwrite the title of an existing todo when one was sent.

        Unlike create, no trim or blank check is applied here.
        """
        with self._lock:
            existing = self._items[self._index_of(todo_id)]
            if "title" in data.model_fields_set and data.title is not None:
                if data.title.strip() == "":
                    logger.warning("Todo %s updated with a blank title", todo_id)
                existing["title"] = data.title
            return existing.copy()

    def toggle(self, todo_id: int) -> TodoEntity:
        with self._lock:
            existing = self._items[self._index_of(todo_id)]
            existing["completed"] = not existing["completed"]
            logger.debug("Toggled todo %s to completed=%s", todo_id, existing["completed"])
            return existing.copy()

    def delete(self, todo_id: int) -> TodoEntity:
        """Remove a todo and return it; the remaining todos keep their order."""
        with self._lock:
            removed = self._items.pop(self._index_of(todo_id))
        logger.info("Deleted todo %s", todo_id)
        return removed

    def clear(self) -> None:
        """Drop every todo. The id counter keeps counting so ids are never reused."""
        with self._lock:
            self._items.clear()


# PUBLIC_INTERFACE
def get_store(request: Request) -> TodoStore:
    """Return the store owned by the application serving this request."""
    return request.app.state.store
