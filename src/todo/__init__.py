"""In-memory todo store shared by the HTTP server and the CLI."""

from .errors import TodoError, TodoNotFoundError, TodoSnapshotError
from .models import TodoItem, TodoPatch
from .store import DEFAULT_PAGE_SIZE, TodoStore

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "TodoError",
    "TodoItem",
    "TodoNotFoundError",
    "TodoPatch",
    "TodoSnapshotError",
    "TodoStore",
]
