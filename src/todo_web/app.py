from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from threading import Lock
from typing import AsyncIterator, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from todo_api.main import create_app as create_api_app
from todo_api.settings import Settings, configure_logging, get_settings
from todo_api.store import TodoStore

from .client import TodoApi, TodoDataLayer
from .view import TodoView

logger = logging.getLogger(__name__)

_view_lock = Lock()


def _build_view(base_url: str) -> TodoView:
    logger.info("Web client talking to API at %s", base_url)
    return TodoView(TodoDataLayer(TodoApi(httpx.Client(base_url=base_url))))


# PUBLIC_INTERFACE
def get_view(request: Request) -> TodoView:
    """
    Return the page's view, creating it on first use.

    The view's HTTP client targets API_BASE_URL when configured and the
    origin the page was requested from otherwise.
    """
    state = request.app.state
    with _view_lock:
        if state.view is None:
            state.view = _build_view(state.settings.api_base_url or str(request.base_url))
        return state.view


# PUBLIC_INTERFACE
def close_view(app: FastAPI) -> None:
    """Close the HTTP client of a view the page application built itself."""
    with _view_lock:
        if app.state.owns_view and app.state.view is not None:
            app.state.view.data.api.http.close()
            logger.info("Closed web client HTTP connection pool")


@asynccontextmanager
async def _page_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    close_view(app)


def _back_to_page(request: Request) -> RedirectResponse:
    return RedirectResponse(url=request.url_for("index"), status_code=303)


def index(request: Request) -> HTMLResponse:
    """Serve the todo page."""
    view = get_view(request)
    view.refresh()
    return HTMLResponse(view.render())


def add_todo(request: Request, title: str = Form("")) -> RedirectResponse:
    get_view(request).submit(title)
    return _back_to_page(request)


def toggle_todo(request: Request, todo_id: int) -> RedirectResponse:
    get_view(request).toggle(todo_id)
    return _back_to_page(request)


def delete_todo(request: Request, todo_id: int) -> RedirectResponse:
    get_view(request).delete(todo_id)
    return _back_to_page(request)


def edit_todo(request: Request, todo_id: int) -> RedirectResponse:
    get_view(request).edit(todo_id)
    return _back_to_page(request)


# PUBLIC_INTERFACE
def create_app(view: Optional[TodoView] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the web application serving the single todo page.

    Args:
        view: The view to serve. Built lazily from settings when omitted.
        settings: Settings to apply; read from the environment when omitted.
    """
    app = FastAPI(title="Todo Web", docs_url=None, redoc_url=None, openapi_url=None,
                  lifespan=_page_lifespan)
    app.state.view = view
    # Views passed in belong to the caller, who closes their client
    app.state.owns_view = view is None
    app.state.settings = settings or get_settings()

    app.add_api_route("/", index, methods=["GET"], response_class=HTMLResponse, name="index")
    app.add_api_route("/todos", add_todo, methods=["POST"])
    app.add_api_route("/todos/{todo_id}/toggle", toggle_todo, methods=["POST"])
    app.add_api_route("/todos/{todo_id}/delete", delete_todo, methods=["POST"])
    app.add_api_route("/todos/{todo_id}/edit", edit_todo, methods=["POST"])
    return app


# PUBLIC_INTERFACE
def build_site(
    store: Optional[TodoStore] = None,
    settings: Optional[Settings] = None,
    view: Optional[TodoView] = None,
) -> FastAPI:
    """
    Serve the API and the page from one application.

    The API keeps /health and /api/todos; everything else falls through to
    the page mounted at the root.
    """
    settings = settings or get_settings()
    page = create_app(view=view, settings=settings)

    # Lifespans of mounted applications are not run, so the site closes the page's client
    @asynccontextmanager
    async def lifespan(_site: FastAPI) -> AsyncIterator[None]:
        yield
        close_view(page)

    site = create_api_app(store=store, settings=settings, lifespan=lifespan)
    site.mount("/", page)
    return site


# PUBLIC_INTERFACE
def run() -> None:
    """Start the combined API and page server with uvicorn."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting todo server on %s:%s", settings.host, settings.port)
    uvicorn.run(build_site(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
