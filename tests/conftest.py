"""Shared fixtures: a fresh store and applications per test."""

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.settings import Settings
from todo_api.store import TodoStore
from todo_web.client import TodoApi, TodoDataLayer
from todo_web.view import TodoView


@pytest.fixture
def settings():
    return Settings(
        cors_allow_origins=["*"],
        log_level="DEBUG",
        host="127.0.0.1",
        port=3001,
        api_base_url=None,
    )


@pytest.fixture
def store():
    return TodoStore()


@pytest.fixture
def api_app(store, settings):
    return create_app(store=store, settings=settings)


@pytest.fixture
def client(api_app):
    return TestClient(api_app)


@pytest.fixture
def data_layer(client):
    """Data layer talking to a live in-process API."""
    return TodoDataLayer(TodoApi(client))


@pytest.fixture
def view(data_layer):
    return TodoView(data_layer)
