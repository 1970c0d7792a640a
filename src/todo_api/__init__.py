"""
FastAPI Todo API package.

Exposes the application factory and the default application instance built
from environment settings (import path: todo_api.app).
"""

from .main import app, create_app  # noqa: F401
