"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class TodoResponse(BaseModel):
    """Serialized todo item."""

    id: int
    name: str
    description: str
    is_completed: bool


class TodoCreateRequest(BaseModel):
    """Request body for creating todo."""

    name: str
    description: str = Field(default="")


class TodoCreatedResponse(BaseModel):
    """Id assigned to a newly created todo."""

    id: int


class TodoUpdateRequest(BaseModel):
    """Request body for updating todo. Omitted fields keep their value."""

    name: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    is_completed: Optional[bool] = Field(default=None)


class TodoUpdatedResponse(BaseModel):
    updated: bool


class TodoDeletedResponse(BaseModel):
    deleted: bool
