import logging

import httpx
import pytest

from todo_web.client import TODOS_KEY, FetchError, TodoApi, TodoDataLayer
from todo_web.view import EMPTY, ERROR_PANEL, FALLBACK_ERROR, LIST, LOADING, TodoView


def make_view(handler):
    requests = []

    def recording(request):
        requests.append(request)
        return handler(request)

    http = httpx.Client(transport=httpx.MockTransport(recording), base_url="http://page.example")
    return TodoView(TodoDataLayer(TodoApi(http))), requests


def serve_list(todos):
    return lambda request: httpx.Response(200, json=todos)


MIXED = [
    {"id": 1, "title": "Todo 1", "completed": False, "createdAt": "2026-01-01T00:00:00.000Z"},
    {"id": 2, "title": "Todo 2", "completed": False, "createdAt": "2026-01-01T00:00:01.000Z"},
    {"id": 3, "title": "Todo 3", "completed": True, "createdAt": "2026-01-01T00:00:02.000Z"},
]


class TestPanels:
    def test_loading_before_first_fetch(self):
        view, _ = make_view(serve_list([]))
        model = view.view_model()
        assert model.panel == LOADING
        assert not model.show_counters
        assert 'role="progressbar"' in view.render()

    def test_counters_are_derived_from_the_list(self):
        view, _ = make_view(serve_list(MIXED))
        assert view.refresh() is True
        model = view.view_model()
        assert model.panel == LIST
        assert model.items_left == 2
        assert model.completed_count == 1
        html = view.render()
        assert "2 items left" in html
        assert "1 completed" in html
        assert "Todo 1" in html

    def test_empty_state_hides_counters(self):
        view, _ = make_view(serve_list([]))
        view.refresh()
        model = view.view_model()
        assert model.panel == EMPTY
        assert not model.show_counters
        html = view.render()
        assert "No todos yet" in html
        assert "items left" not in html
        assert 'role="progressbar"' not in html

    def test_rejected_fetch_shows_error_panel(self):
        def handler(request):
            raise httpx.ConnectError("Network error", request=request)

        view, _ = make_view(handler)
        assert view.refresh() is False
        model = view.view_model()
        assert model.panel == ERROR_PANEL
        assert model.error_message == "Network error"
        html = view.render()
        assert "Error loading todos" in html
        assert "Network error" in html

    def test_non_ok_fetch_shows_error_panel(self):
        view, _ = make_view(lambda request: httpx.Response(503))
        view.refresh()
        assert view.view_model().error_message == "Failed to fetch todos"

    def test_error_without_message_uses_fallback(self):
        view, _ = make_view(serve_list([]))

        def boom():
            raise FetchError("")

        with pytest.raises(FetchError):
            view.data.cache.fetch(TODOS_KEY, boom)
        assert view.view_model().error_message == FALLBACK_ERROR

    def test_completed_titles_are_struck_through_and_escaped(self):
        todos = [
            {"id": 1, "title": "<b>bold</b>", "completed": True, "createdAt": "2026-01-01T00:00:00.000Z"},
        ]
        view, _ = make_view(serve_list(todos))
        view.refresh()
        html = view.render()
        assert 'class="todo completed"' in html
        assert "&lt;b&gt;bold&lt;/b&gt;" in html


class TestIntents:
    def test_blank_submit_sends_nothing(self):
        view, requests = make_view(serve_list([]))
        assert view.submit("   ") is False
        assert requests == []
        assert view.new_title == "   "

    def test_submit_clears_input_and_refetches(self, view):
        view.refresh()
        assert view.submit("Buy milk") is True
        assert view.new_title == ""
        assert view.view_model().refreshing
        view.refresh()
        model = view.view_model()
        assert [t["title"] for t in model.todos] == ["Buy milk"]
        assert not model.refreshing

    def test_toggle_and_delete_refetch_the_list(self, view):
        view.submit("A")
        view.submit("B")
        view.refresh()
        first = view.view_model().todos[0]

        assert view.toggle(first["id"]) is True
        view.refresh()
        model = view.view_model()
        assert (model.items_left, model.completed_count) == (1, 1)

        assert view.delete(first["id"]) is True
        view.refresh()
        assert [t["title"] for t in view.view_model().todos] == ["B"]

    def test_failed_delete_keeps_page_usable(self, view):
        view.refresh()
        assert view.delete(404) is False
        assert view.view_model().panel == EMPTY

    def test_edit_is_a_no_op(self, caplog):
        view, requests = make_view(serve_list(MIXED))
        view.refresh()
        sent = len(requests)
        with caplog.at_level(logging.INFO, logger="todo_web.view"):
            view.edit(1)
        assert len(requests) == sent
        assert "Edit not implemented" in caplog.text
        assert view.view_model().todos == MIXED
