"""Route registration helpers."""

from .health import register_health_routes
from .todo import register_todo_routes

__all__ = [
    "register_health_routes",
    "register_todo_routes",
]
