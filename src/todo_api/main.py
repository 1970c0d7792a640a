from __future__ import annotations

import logging
from typing import AsyncContextManager, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import TodoError
from .routers import todos as todos_router
from .schemas import HealthOut
from .settings import Settings, get_settings
from .store import TodoStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "Create, list, update, toggle and delete todo items."},
]


async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
    """
    Map domain errors to their status code with a body of the form
    {"error": "<message>"}.
    """
    logger.debug("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def health_check() -> HealthOut:
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return HealthOut(status="ok")


# PUBLIC_INTERFACE
def create_app(
    store: Optional[TodoStore] = None,
    settings: Optional[Settings] = None,
    lifespan: Optional[Callable[[FastAPI], AsyncContextManager[None]]] = None,
) -> FastAPI:
    """
    Build the API application around a todo store.

    Args:
        store: The store served by this application. A new empty store is
            created when omitted.
        settings: Settings to apply; read from the environment when omitted.
        lifespan: Optional startup/shutdown context for the application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo API",
        description="Backend API for a single in-memory todo list.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else TodoStore()
    app.state.settings = settings

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TodoError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_api_route("/health", health_check, methods=["GET"], response_model=HealthOut,
                      summary="Health Check", tags=["health"])
    app.include_router(todos_router.router)
    return app


app = create_app()
