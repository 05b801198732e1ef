from __future__ import annotations

import re
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, status

from ..errors import BadRequestError, NotFoundError
from ..repositories import Repository, get_repository
from ..schemas import ErrorOut, TodoCreate, TodoOut, TodoUpdate

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)

_ID_RE = re.compile(r"\s*[+-]?[0-9]+\s*")
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1

_INVALID_ID = {400: {"model": ErrorOut, "description": "Invalid id"}}
_NOT_FOUND = {404: {"model": ErrorOut, "description": "Todo not found"}}


# PUBLIC_INTERFACE
def parse_todo_id(todo_id: str = Path(..., description="Integer id of the todo item")) -> int:
    """
    Parse the path id as a base-10 integer that fits a bigint column.

    Raises:
        BadRequestError("Invalid id") for anything else ('abc', '1.5', '').
    """
    if not _ID_RE.fullmatch(todo_id):
        raise BadRequestError("Invalid id")
    value = int(todo_id)
    if not _ID_MIN <= value <= _ID_MAX:
        raise BadRequestError("Invalid id")
    return value


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo, most recently created (highest id) first. Not paginated.",
)
async def list_todos(repo: Repository = Depends(get_repository)) -> List[TodoOut]:
    items = await repo.list()
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={**_INVALID_ID, **_NOT_FOUND},
)
async def get_todo(
    todo_id: int = Depends(parse_todo_id),
    repo: Repository = Depends(get_repository),
) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    item = await repo.get(todo_id)
    if not item:
        raise NotFoundError()
    return TodoOut(**item)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description=(
        "Create a new Todo item from its title and return the created resource. "
        "The title is trimmed and must be 1..200 characters; completed starts as false."
    ),
    responses={400: {"model": ErrorOut, "description": "Missing, non-string or too long title"}},
)
async def create_todo(
    payload: Optional[TodoCreate] = Body(default=None),
    repo: Repository = Depends(get_repository),
) -> TodoOut:
    """
    Create a new Todo. A missing body is treated like a missing title.
    """
    if payload is None:
        raise BadRequestError("title is required")
    created = await repo.create(payload)
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Partially update a Todo item. Only the keys present in the body "
        "(title and/or completed) are changed; the others keep their stored value."
    ),
    responses={
        400: {"model": ErrorOut, "description": "Invalid id, nothing to update or invalid field"},
        **_NOT_FOUND,
    },
)
async def update_todo(
    todo_id: int = Depends(parse_todo_id),
    payload: Optional[TodoUpdate] = Body(default=None),
    repo: Repository = Depends(get_repository),
) -> TodoOut:
    if payload is None or payload.is_empty():
        raise BadRequestError("Nothing to update")
    updated = await repo.update(todo_id, payload)
    if not updated:
        raise NotFoundError()
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        **_INVALID_ID,
        **_NOT_FOUND,
    },
)
async def delete_todo(
    todo_id: int = Depends(parse_todo_id),
    repo: Repository = Depends(get_repository),
) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    deleted = await repo.delete(todo_id)
    if not deleted:
        raise NotFoundError()
    return None
