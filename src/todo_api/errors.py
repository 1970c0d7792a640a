from __future__ import annotations


# PUBLIC_INTERFACE
class TodoError(Exception):
    """
    Base class for domain errors raised by the todo store.

    Each subclass carries the HTTP status code the API answers with; the
    message becomes the ``error`` field of the JSON response body.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TodoValidationError(TodoError):
    """Raised when a todo cannot be created from the given input."""

    status_code = 400


class TodoNotFoundError(TodoError):
    """Raised when no todo exists with the requested id."""

    status_code = 404

    def __init__(self, message: str = "Todo not found") -> None:
        super().__init__(message)
