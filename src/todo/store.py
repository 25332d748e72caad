from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from .errors import TodoNotFoundError, TodoSnapshotError
from .models import TodoItem, TodoPatch

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class TodoStore:
    """In-memory todo table with creation-order pagination.

    ``_records`` and ``_order`` always hold the same set of ids. Writers are
    serialized by ``_lock``; readers hold it only while copying out, so a read
    never sees half of a write.
    """

    def __init__(self, default_page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._lock = threading.Lock()
        self._records: Dict[int, TodoItem] = {}
        self._order: List[int] = []
        self._next_id = 0
        self.default_page_size = default_page_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def __contains__(self, todo_id: object) -> bool:
        with self._lock:
            return todo_id in self._records

    @property
    def next_id(self) -> int:
        return self._next_id

    def create_todo(self, name: str, description: str) -> int:
        """Store a new, not yet completed todo and return its id.

        Raises:
            TodoError: reserved for input validation; nothing raises it yet.
        """
        with self._lock:
            todo_id = self._next_id
            self._next_id += 1
            self._records[todo_id] = TodoItem(
                id=todo_id,
                name=name,
                description=description,
                is_completed=False,
            )
            self._order.append(todo_id)
        logger.info("Todo created: %s", todo_id)
        return todo_id

    def get_todo(self, todo_id: int) -> TodoItem:
        with self._lock:
            item = self._records.get(todo_id)
        if item is None:
            raise TodoNotFoundError(todo_id)
        return item

    def get_todos(self, offset: int = 0, limit: Optional[int] = None) -> List[TodoItem]:
        """Return up to ``limit`` todos in creation order, starting at ``offset``.

        Out-of-range or negative arguments yield an empty list.
        """
        if offset < 0 or (limit is not None and limit <= 0):
            return []
        end = None if limit is None else offset + limit
        with self._lock:
            return [self._records[todo_id] for todo_id in self._order[offset:end]]

    def get_todos_page(self, page: int, page_size: Optional[int] = None) -> List[TodoItem]:
        """Page-number variant of :meth:`get_todos`. Pages start at 1; ``page <= 0`` means 1."""
        if page_size is None:
            page_size = self.default_page_size
        offset = (max(page, 1) - 1) * page_size
        return self.get_todos(offset, page_size)

    def update_todo(
        self,
        todo_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> bool:
        patch = TodoPatch(name=name, description=description, is_completed=is_completed)
        return self.apply_patch(todo_id, patch)

    def apply_patch(self, todo_id: int, patch: TodoPatch) -> bool:
        """Replace the provided fields of a todo in one step."""
        changes = patch.changes()
        with self._lock:
            current = self._records.get(todo_id)
            if current is None:
                raise TodoNotFoundError(todo_id)
            if changes:
                self._records[todo_id] = replace(current, **changes)
        logger.debug("Todo updated: %s fields=%s", todo_id, sorted(changes))
        return True

    def delete_todo(self, todo_id: int) -> bool:
        with self._lock:
            if todo_id not in self._records:
                raise TodoNotFoundError(todo_id)
            del self._records[todo_id]
            self._order.remove(todo_id)
        logger.info("Todo deleted: %s", todo_id)
        return True

    def to_snapshot(self) -> Dict[str, Any]:
        """JSON-ready copy of the store, todos in creation order."""
        with self._lock:
            return {
                "next_id": self._next_id,
                "todos": [self._records[todo_id].to_dict() for todo_id in self._order],
            }

    @classmethod
    def from_snapshot(
        cls,
        data: Mapping[str, Any],
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "TodoStore":
        store = cls(default_page_size=default_page_size)
        todos = data.get("todos", [])
        if not isinstance(todos, list):
            raise TodoSnapshotError("'todos' must be a list")

        for entry in todos:
            item = _item_from_dict(entry)
            if item.id in store._records:
                raise TodoSnapshotError(f"duplicate todo id {item.id}")
            store._records[item.id] = item
            store._order.append(item.id)

        issued = max(store._order, default=-1) + 1
        next_id = data.get("next_id", issued)
        if not _is_uint(next_id):
            raise TodoSnapshotError(f"invalid next_id: {next_id!r}")
        if next_id < issued:
            raise TodoSnapshotError(
                f"next_id {next_id} must be greater than every stored id"
            )
        store._next_id = next_id
        return store


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _item_from_dict(entry: Any) -> TodoItem:
    if not isinstance(entry, Mapping):
        raise TodoSnapshotError(f"todo entry must be an object, got {entry!r}")
    try:
        todo_id = entry["id"]
        name = entry["name"]
        description = entry.get("description", "")
        is_completed = entry.get("is_completed", False)
    except KeyError as exc:
        raise TodoSnapshotError(f"todo entry missing {exc.args[0]!r}") from exc

    if not _is_uint(todo_id):
        raise TodoSnapshotError(f"invalid todo id: {todo_id!r}")
    if not isinstance(name, str) or not isinstance(description, str):
        raise TodoSnapshotError(f"todo {todo_id} has non-text fields")
    if not isinstance(is_completed, bool):
        raise TodoSnapshotError(f"todo {todo_id} has a non-boolean is_completed")
    return TodoItem(
        id=todo_id,
        name=name,
        description=description,
        is_completed=is_completed,
    )
