"""
Client data layer for the todo page.

TodoApi speaks HTTP to the todo API. Every path is relative (``/api/todos``)
and resolved against the base URL of the httpx client it is given, which is
the page's own origin unless configured otherwise.

TodoDataLayer puts the list behind a query cache and invalidates it after
every successful mutation, so the next read always re-fetches the full list.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from .cache import QueryCache, QueryState

logger = logging.getLogger(__name__)

API_URL = "/api/todos"
TODOS_KEY = ("todos",)

Todo = Dict[str, Any]


# PUBLIC_INTERFACE
class FetchError(Exception):
    """Network failure or non-success response while talking to the API."""


# PUBLIC_INTERFACE
class TodoApi:
    """
    Thin wrapper over an httpx client for the todo endpoints.

    Only fetch_todos and delete_todo look at the response status; add_todo
    returns whatever body the server sent and toggle_todo ignores the body.
    """

    def __init__(self, http: httpx.Client) -> None:
        self.http = http

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise FetchError(str(exc) or exc.__class__.__name__) from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON in response from {response.request.url.path}") from exc

    def fetch_todos(self) -> List[Todo]:
        response = self._request("GET", API_URL)
        if not response.is_success:
            raise FetchError("Failed to fetch todos")
        return self._json(response)

    def add_todo(self, title: str) -> Any:
        response = self._request("POST", API_URL, json={"title": title})
        return self._json(response)

    def toggle_todo(self, todo_id: int) -> None:
        self._request("PATCH", f"{API_URL}/{todo_id}/toggle")

    def delete_todo(self, todo_id: int) -> Todo:
        response = self._request("DELETE", f"{API_URL}/{todo_id}")
        if not response.is_success:
            raise FetchError("Failed to delete todo")
        return self._json(response)


# PUBLIC_INTERFACE
class TodoDataLayer:
    """
    Cached todo list plus the mutations that invalidate it.

    Each mutation runs the request, invalidates the list on success and then
    calls ``on_success`` if given. Failures propagate as FetchError and leave
    the cache untouched.
    """

    def __init__(self, api: TodoApi, cache: Optional[QueryCache] = None) -> None:
        self.api = api
        self.cache = cache or QueryCache()

    @property
    def state(self) -> QueryState:
        return self.cache.state(TODOS_KEY)

    def fetch_todos(self) -> List[Todo]:
        return self.cache.fetch(TODOS_KEY, self.api.fetch_todos)

    def _mutate(self, fn: Callable[[], Any], on_success: Optional[Callable[[], None]]) -> Any:
        result = fn()
        self.cache.invalidate(TODOS_KEY)
        if on_success is not None:
            on_success()
        return result

    def add_todo(self, title: str, on_success: Optional[Callable[[], None]] = None) -> Any:
        return self._mutate(lambda: self.api.add_todo(title), on_success)

    def toggle_todo(self, todo_id: int, on_success: Optional[Callable[[], None]] = None) -> None:
        self._mutate(lambda: self.api.toggle_todo(todo_id), on_success)

    def delete_todo(self, todo_id: int, on_success: Optional[Callable[[], None]] = None) -> Todo:
        return self._mutate(lambda: self.api.delete_todo(todo_id), on_success)
