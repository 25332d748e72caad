from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class TodoItem:
    """Stored todo record. Instances are immutable; updates swap in a new one."""

    id: int
    name: str
    description: str
    is_completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "is_completed": self.is_completed,
        }


@dataclass(frozen=True, slots=True)
class TodoPatch:
    """Partial update. ``None`` leaves the field as it is."""

    name: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        """Fields that were actually provided."""
        return {
            field: value
            for field, value in (
                ("name", self.name),
                ("description", self.description),
                ("is_completed", self.is_completed),
            )
            if value is not None
        }

    def is_empty(self) -> bool:
        return not self.changes()
