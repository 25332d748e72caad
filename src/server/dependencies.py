"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from functools import lru_cache

from src.todo import TodoItem, TodoStore
from src.todo_backend.config import Config
from src.todo_backend.logger import setup_logger

from .schemas import TodoResponse

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_todo_store() -> TodoStore:
    """Process-wide TodoStore, created on first use."""
    return TodoStore(default_page_size=config.store.default_page_size)


def serialize_todo(item: TodoItem) -> TodoResponse:
    """Convert domain TodoItem to API response."""
    return TodoResponse(
        id=item.id,
        name=item.name,
        description=item.description,
        is_completed=item.is_completed,
    )
