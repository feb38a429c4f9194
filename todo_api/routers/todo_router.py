from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_db
from todo_api.dependencies import get_current_user
from todo_api.schemas.auth import CurrentUser
from todo_api.schemas.todo import (
    DeleteResponse,
    TodoCreate,
    TodoListResponse,
    TodoOut,
    TodoResponse,
    TodoUpdate,
)
from todo_api.services.todo_service import TodoService

router = APIRouter()
service = TodoService()


@router.post("", response_model=TodoResponse, status_code=201)
async def create_todo(
    todo_in: TodoCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    todo = await service.create_todo(db, current_user, todo_in)
    return TodoResponse(todo=TodoOut.model_validate(todo))


@router.get("", response_model=TodoListResponse)
async def list_todos(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    todos = await service.list_todos(db, current_user)
    return TodoListResponse(todos=[TodoOut.model_validate(t) for t in todos])


# ids arrive as strings so malformed ones get the API's 400 instead of a 422
@router.put("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    todo_in: TodoUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    todo = await service.update_todo(db, current_user, todo_id, todo_in)
    return TodoResponse(todo=TodoOut.model_validate(todo))


@router.delete("/{todo_id}", response_model=DeleteResponse)
async def delete_todo(
    todo_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    await service.delete_todo(db, current_user, todo_id)
    return DeleteResponse()
