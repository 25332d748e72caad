"""JSON snapshot files for hosts that keep a store across processes."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from .errors import TodoSnapshotError
from .store import DEFAULT_PAGE_SIZE, TodoStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def default_state_path() -> Path:
    env_path = os.getenv("TODO_BACKEND_STATE_FILE")
    if env_path:
        return Path(env_path)
    root = Path(__file__).resolve().parents[2]
    return root / "data" / "todos.json"


def load_store(
    path: Optional[PathLike] = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> TodoStore:
    """Read a store from ``path``. A missing file gives an empty store."""
    state_path = Path(path) if path else default_state_path()
    if not state_path.exists():
        logger.debug("No snapshot at %s, starting empty", state_path)
        return TodoStore(default_page_size=default_page_size)

    try:
        with open(state_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise TodoSnapshotError(f"{state_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise TodoSnapshotError(f"{state_path} must contain a JSON object")
    return TodoStore.from_snapshot(data, default_page_size=default_page_size)


def save_store(store: TodoStore, path: Optional[PathLike] = None) -> Path:
    """Write ``store`` to ``path`` via a temp file, then rename over the target."""
    state_path = Path(path) if path else default_state_path()
    state_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = state_path.with_suffix(state_path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(store.to_snapshot(), f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, state_path)
    logger.debug("Snapshot written: %s", state_path)
    return state_path
