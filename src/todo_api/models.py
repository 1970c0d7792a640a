from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item held by the
    in-memory store.

    Fields:
    - id: Unique integer identifier, issued from a counter that never repeats
    - title: Task title (non-blank at creation; updates store it as sent)
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp, immutable
    """

    id: int
    title: str
    completed: bool
    created_at: datetime
