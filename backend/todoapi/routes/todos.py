"""
Todo API Backend: Todo Item Route Handlers
============================================

What:  CRUD endpoints under /todoitems.
How:   Each handler gets a request-scoped TodoRepository (bound to the
       process-wide storage on app.state), calls one repository operation,
       and maps the result to a status code.

Result mapping:
    None / False from the repository → NotFoundError → 404 (global handler)
    StorageError                      → 500 (global handler)

Route order matters: /todoitems/complete is declared before
/todoitems/{todo_id} so "complete" is never read as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from todoapi.exceptions import NotFoundError
from todoapi.schemas.todo import ErrorResponse, Todo
from todoapi.services.todo_repository import TodoRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todoitems", tags=["Todos"])

_ERRORS = {500: {"description": "Storage error", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Todo item not found", "model": ErrorResponse}}


def get_todo_repository(request: Request) -> TodoRepository:
    """FastAPI dependency: a repository over the storage built at startup."""
    return TodoRepository(request.app.state.storage)


@router.get(
    "",
    response_model=List[Todo],
    responses=_ERRORS,
    summary="List all todo items",
)
async def list_todos(repository: TodoRepository = Depends(get_todo_repository)) -> List[Todo]:
    return await repository.get_all()


@router.get(
    "/complete",
    response_model=List[Todo],
    responses=_ERRORS,
    summary="List completed todo items",
)
async def list_complete_todos(
    repository: TodoRepository = Depends(get_todo_repository),
) -> List[Todo]:
    return await repository.get_complete()


@router.get(
    "/{todo_id}",
    response_model=Todo,
    responses={**_NOT_FOUND, **_ERRORS},
    summary="Get a todo item by ID",
)
async def get_todo(
    todo_id: str,
    repository: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    todo = await repository.get_by_id(todo_id)
    if todo is None:
        raise NotFoundError(resource="todo item", resource_id=todo_id)
    return todo


@router.post(
    "",
    response_model=Todo,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a todo item",
    description="Any `id` in the body is ignored; the server assigns a new one.",
)
async def create_todo(
    todo: Todo,
    response: Response,
    repository: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    created = await repository.create(todo)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return created


@router.put(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_ERRORS},
    summary="Update a todo item",
    description="Only `name` and `isComplete` are applied; the `id` in the body is ignored.",
)
async def update_todo(
    todo_id: str,
    todo: Todo,
    repository: TodoRepository = Depends(get_todo_repository),
) -> Response:
    updated = await repository.update(todo_id, todo)
    if updated is None:
        raise NotFoundError(resource="todo item", resource_id=todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_ERRORS},
    summary="Delete a todo item",
)
async def delete_todo(
    todo_id: str,
    repository: TodoRepository = Depends(get_todo_repository),
) -> Response:
    if not await repository.delete(todo_id):
        raise NotFoundError(resource="todo item", resource_id=todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
