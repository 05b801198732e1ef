from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import asyncpg
from fastapi import Request

from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate

_COLUMNS = "id, title, completed, created_at"

_SQL_LIST = f"SELECT {_COLUMNS} FROM todos ORDER BY id DESC"
_SQL_GET = f"SELECT {_COLUMNS} FROM todos WHERE id = $1::bigint"
_SQL_INSERT = f"INSERT INTO todos (title) VALUES ($1) RETURNING {_COLUMNS}"
# Absent fields are passed as NULL and keep their stored value.
_SQL_UPDATE = f"""
    UPDATE todos
    SET
      title = COALESCE($2, title),
      completed = COALESCE($3, completed)
    WHERE id = $1::bigint
    RETURNING {_COLUMNS}
"""
_SQL_DELETE = "DELETE FROM todos WHERE id = $1::bigint"
_SQL_PING = "SELECT 1"


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    async def ping(self) -> None:
        """Run a trivial query; raise if the backend is unreachable."""

    @abstractmethod
    async def list(self) -> List[TodoEntity]:
        """Return every todo, newest id first."""

    @abstractmethod
    async def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    async def create(self, data: TodoCreate) -> TodoEntity:
        """Insert a new todo with completed=false and return the stored row."""

    @abstractmethod
    async def update(self, todo_id: int, data: TodoUpdate) -> Optional[TodoEntity]:
        """Apply the fields present in data. Return the updated row or None if not found."""

    @abstractmethod
    async def delete(self, todo_id: int) -> bool:
        """Delete a todo by id. Return True if deleted, False if not found."""


def _row_to_entity(row: Mapping[str, Any]) -> TodoEntity:
    return {
        "id": int(row["id"]),
        "title": str(row["title"]),
        "completed": bool(row["completed"]),
        "created_at": row["created_at"],
    }


def _affected_rows(status: str) -> int:
    """Extract the row count from a command tag such as 'DELETE 1'."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class PostgresRepository(Repository):
    """
    Repository issuing one parameterized statement per operation on an
    asyncpg pool. Each call acquires a connection only for the duration of
    that statement.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def ping(self) -> None:
        await self._pool.fetchval(_SQL_PING)

    async def list(self) -> List[TodoEntity]:
        rows = await self._pool.fetch(_SQL_LIST)
        return [_row_to_entity(r) for r in rows]

    async def get(self, todo_id: int) -> Optional[TodoEntity]:
        row = await self._pool.fetchrow(_SQL_GET, todo_id)
        return _row_to_entity(row) if row else None

    async def create(self, data: TodoCreate) -> TodoEntity:
        row = await self._pool.fetchrow(_SQL_INSERT, data.title)
        assert row is not None
        return _row_to_entity(row)

    async def update(self, todo_id: int, data: TodoUpdate) -> Optional[TodoEntity]:
        title = data.title if data.has_title() else None
        completed = data.completed if data.has_completed() else None
        row = await self._pool.fetchrow(_SQL_UPDATE, todo_id, title, completed)
        return _row_to_entity(row) if row else None

    async def delete(self, todo_id: int) -> bool:
        status = await self._pool.execute(_SQL_DELETE, todo_id)
        return _affected_rows(status) > 0


class InMemoryRepository(Repository):
    """
    Dict-backed repository with the same observable behavior as
    PostgresRepository: sequential ids, newest-first listing and patch
    updates. Used as the storage substitute in tests.
    """

    def __init__(self) -> None:
        self._items: Dict[int, TodoEntity] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    async def ping(self) -> None:
        return None

    async def list(self) -> List[TodoEntity]:
        return [self._items[k].copy() for k in sorted(self._items, reverse=True)]

    async def get(self, todo_id: int) -> Optional[TodoEntity]:
        item = self._items.get(todo_id)
        return None if item is None else item.copy()

    async def create(self, data: TodoCreate) -> TodoEntity:
        entity: TodoEntity = {
            "id": self._next_id,
            "title": data.title,
            "completed": False,
            "created_at": self._now(),
        }
        self._next_id += 1
        self._items[entity["id"]] = entity
        return entity.copy()

    async def update(self, todo_id: int, data: TodoUpdate) -> Optional[TodoEntity]:
        existing = self._items.get(todo_id)
        if existing is None:
            return None

        # Update only provided fields
        updated = existing.copy()
        if data.has_title():
            updated["title"] = data.title  # type: ignore[typeddict-item]
        if data.has_completed():
            updated["completed"] = data.completed  # type: ignore[typeddict-item]

        self._items[todo_id] = updated
        return updated.copy()

    async def delete(self, todo_id: int) -> bool:
        return self._items.pop(todo_id, None) is not None


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    FastAPI dependency returning the repository attached to the running
    application by create_app().
    """
    return request.app.state.repository
