from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A Todo row as returned by the storage layer.

    Fields:
    - id: Unique integer identifier assigned by the database
    - title: Short title (1..200 chars, trimmed on input via schemas)
    - completed: Boolean completion flag
    - created_at: Creation timestamp assigned by the database
    """

    id: int
    title: str
    completed: bool
    created_at: datetime
