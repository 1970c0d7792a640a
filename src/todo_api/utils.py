from __future__ import annotations

from .errors import TodoNotFoundError


# PUBLIC_INTERFACE
def parse_todo_id(raw: str) -> int:
    """
    Parse a path segment into a todo id.

    Only plain decimal digits are accepted. Anything else cannot name an
    existing todo, so it is reported the same way as an unknown id.

    Raises:
        TodoNotFoundError: if the segment is not a non-negative integer.
    """
    value = raw.strip()
    if not value.isascii() or not value.isdigit():
        raise TodoNotFoundError()
    return int(value)
