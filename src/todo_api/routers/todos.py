from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..schemas import ErrorOut, TodoCreate, TodoOut, TodoUpdate
from ..store import TodoStore, get_store
from ..utils import parse_todo_id

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)

_NOT_FOUND = {404: {"model": ErrorOut, "description": "Todo not found"}}


def _get_store(store: TodoStore = Depends(get_store)) -> TodoStore:
    """
    Dependency wrapper for the store to keep signatures clean.
    """
    return store


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo in creation order.",
)
def list_todos(store: TodoStore = Depends(_get_store)) -> List[TodoOut]:
    return [TodoOut(**item) for item in store.list()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new, not yet completed todo at the end of the list.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Title is missing or blank"},
    },
)
def create_todo(
    payload: Optional[TodoCreate] = None,
    store: TodoStore = Depends(_get_store),
) -> TodoOut:
    created = store.create(payload or TodoCreate())
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Replace the title of a todo when one is sent. The title is stored as sent.",
    responses=_NOT_FOUND,
)
def update_todo(
    todo_id: str,
    payload: Optional[TodoUpdate] = None,
    store: TodoStore = Depends(_get_store),
) -> TodoOut:
    updated = store.update(parse_todo_id(todo_id), payload or TodoUpdate())
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}/toggle",
    response_model=TodoOut,
    summary="Toggle Todo",
    description="Flip the completion status of a todo.",
    responses=_NOT_FOUND,
)
def toggle_todo(todo_id: str, store: TodoStore = Depends(_get_store)) -> TodoOut:
    toggled = store.toggle(parse_todo_id(todo_id))
    return TodoOut(**toggled)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Delete Todo",
    description="Delete a todo and return it.",
    responses=_NOT_FOUND,
)
def delete_todo(todo_id: str, store: TodoStore = Depends(_get_store)) -> TodoOut:
    """
    Delete a Todo. Returns the removed item, or 404 if it does not exist.
    """
    deleted = store.delete(parse_todo_id(todo_id))
    return TodoOut(**deleted)
