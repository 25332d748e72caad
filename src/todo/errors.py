"""Exceptions raised by the todo store."""

from __future__ import annotations


class TodoError(Exception):
    """Base class for todo store failures."""


class TodoNotFoundError(TodoError, LookupError):
    """Raised when an operation references an id the store does not hold."""

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"Todo {todo_id} not found")


class TodoSnapshotError(TodoError):
    """Raised when a snapshot document cannot be turned back into a store."""
