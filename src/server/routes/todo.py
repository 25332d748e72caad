"""Todo endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException

from src.todo import TodoNotFoundError, TodoPatch

from ..dependencies import get_todo_store, serialize_todo
from ..schemas import (
    TodoCreateRequest,
    TodoCreatedResponse,
    TodoDeletedResponse,
    TodoResponse,
    TodoUpdatedResponse,
    TodoUpdateRequest,
)

logger = logging.getLogger(__name__)


def register_todo_routes(app: FastAPI) -> None:
    """Register todo CRUD endpoints."""

    @app.get("/api/todos", response_model=List[TodoResponse])
    async def list_todos(offset: int = 0, limit: Optional[int] = None) -> List[TodoResponse]:
        """List todos in creation order."""
        store = get_todo_store()
        try:
            todos = await asyncio.to_thread(store.get_todos, offset, limit)
            return [serialize_todo(todo) for todo in todos]
        except Exception as exc:
            logger.exception("Failed to list todos: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list todos") from exc

    @app.get("/api/todos/page/{page}", response_model=List[TodoResponse])
    async def list_todos_page(page: int, page_size: Optional[int] = None) -> List[TodoResponse]:
        """List one numbered page of todos (pages start at 1)."""
        store = get_todo_store()
        try:
            todos = await asyncio.to_thread(store.get_todos_page, page, page_size)
            return [serialize_todo(todo) for todo in todos]
        except Exception as exc:
            logger.exception("Failed to list todo page %s: %s", page, exc)
            raise HTTPException(status_code=500, detail="Failed to list todos") from exc

    @app.get("/api/todos/{todo_id}", response_model=TodoResponse)
    async def get_todo(todo_id: int) -> TodoResponse:
        """Fetch a single todo."""
        store = get_todo_store()
        try:
            todo = await asyncio.to_thread(store.get_todo, todo_id)
            return serialize_todo(todo)
        except TodoNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to get todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to get todo") from exc

    @app.post("/api/todos", response_model=TodoCreatedResponse, status_code=201)
    async def create_todo(request: TodoCreateRequest) -> TodoCreatedResponse:
        """Create a new todo."""
        store = get_todo_store()
        try:
            todo_id = await asyncio.to_thread(
                store.create_todo,
                request.name,
                request.description,
            )
            return TodoCreatedResponse(id=todo_id)
        except Exception as exc:
            logger.exception("Failed to create todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create todo") from exc

    @app.patch("/api/todos/{todo_id}", response_model=TodoUpdatedResponse)
    async def update_todo(todo_id: int, request: TodoUpdateRequest) -> TodoUpdatedResponse:
        """Update an existing todo."""
        store = get_todo_store()
        try:
            patch = TodoPatch(**request.model_dump(exclude_none=True))
            updated = await asyncio.to_thread(store.apply_patch, todo_id, patch)
            return TodoUpdatedResponse(updated=updated)
        except TodoNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to update todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to update todo") from exc

    @app.delete("/api/todos/{todo_id}", response_model=TodoDeletedResponse)
    async def delete_todo(todo_id: int) -> TodoDeletedResponse:
        """Delete a todo."""
        store = get_todo_store()
        try:
            deleted = await asyncio.to_thread(store.delete_todo, todo_id)
            return TodoDeletedResponse(deleted=deleted)
        except TodoNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to delete todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete todo") from exc
