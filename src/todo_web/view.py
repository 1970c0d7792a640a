from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from fastapi.templating import Jinja2Templates

from .cache import ERROR
from .client import FetchError, Todo, TodoDataLayer

logger = logging.getLogger(__name__)

LOADING = "loading"
ERROR_PANEL = "error"
EMPTY = "empty"
LIST = "list"

FALLBACK_ERROR = "Failed to load todos. Please try again."

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# PUBLIC_INTERFACE
@dataclass
class ViewModel:
    """
    Everything the page template needs, derived from the cached list.

    panel is one of loading, error, empty, list.
    """

    panel: str
    todos: List[Todo] = field(default_factory=list)
    error_message: Optional[str] = None
    new_title: str = ""
    refreshing: bool = False

    @property
    def items_left(self) -> int:
        return sum(1 for t in self.todos if t.get("completed") is False)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.todos if t.get("completed") is True)

    @property
    def items_left_label(self) -> str:
        return f"{self.items_left} items left"

    @property
    def completed_label(self) -> str:
        return f"{self.completed_count} completed"

    @property
    def show_counters(self) -> bool:
        return self.panel == LIST


# PUBLIC_INTERFACE
class TodoView:
    """
    The todo page: pending input state plus user intents.

    Holds no copy of the list. Every derivation reads the data layer's cached
    state, and every intent goes through the data layer, which invalidates
    the list after a successful mutation.

    One view serves the whole process, so the pending input in new_title is
    shared by every visitor of the page.
    """

    def __init__(self, data: TodoDataLayer) -> None:
        self.data = data
        self.new_title = ""

    def refresh(self) -> bool:
        """
        Fetch the list if nothing fresh is cached. A failure is kept on the
        query state and shows up as the error panel; returns False then.
        """
        try:
            self.data.fetch_todos()
        except FetchError:
            return False
        return True

    def view_model(self) -> ViewModel:
        state = self.data.state
        if state.status == ERROR:
            message = str(state.error) if state.error is not None else ""
            return ViewModel(panel=ERROR_PANEL, error_message=message or FALLBACK_ERROR,
                             new_title=self.new_title)
        if not state.has_data:
            return ViewModel(panel=LOADING, new_title=self.new_title)

        todos: List[Todo] = list(state.data)
        return ViewModel(
            panel=LIST if todos else EMPTY,
            todos=todos,
            new_title=self.new_title,
            refreshing=state.is_fetching or state.is_stale,
        )

    def render(self) -> str:
        return templates.get_template("index.html").render(view=self.view_model())

    def _clear_input(self) -> None:
        self.new_title = ""

    def submit(self, title: Optional[str] = None) -> bool:
        """
        Add a todo from the pending input (or the given title).

        Blank input is ignored without contacting the server. Returns True
        when a request was sent and succeeded.
        """
        if title is not None:
            self.new_title = title
        if not self.new_title.strip():
            return False
        try:
            self.data.add_todo(self.new_title, on_success=self._clear_input)
        except FetchError as exc:
            logger.warning("Adding todo failed: %s", exc)
            return False
        return True

    def toggle(self, todo_id: int) -> bool:
        try:
            self.data.toggle_todo(todo_id)
        except FetchError as exc:
            logger.warning("Toggling todo %s failed: %s", todo_id, exc)
            return False
        return True

    def delete(self, todo_id: int) -> bool:
        try:
            self.data.delete_todo(todo_id)
        except FetchError as exc:
            logger.warning("Deleting todo %s failed: %s", todo_id, exc)
            return False
        return True

    def edit(self, todo_id: int) -> None:
        # Editing is not offered; the button is a placeholder
        logger.info("Edit not implemented (todo %s)", todo_id)
