import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.exceptions import InternalError, TodoNotFoundError, ValidationError
from todo_api.models.todo import Todo
from todo_api.repositories.todo_repo import TodoRepository
from todo_api.sanitizer import clean_title
from todo_api.schemas.auth import CurrentUser
from todo_api.schemas.todo import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

MAX_ID = 2**63 - 1


def parse_todo_id(raw: str) -> int:
    """Path ids must be positive base-10 integers."""
    try:
        todo_id = int(raw, 10)
    except (TypeError, ValueError):
        raise ValidationError("Invalid todo ID")
    if not 0 < todo_id <= MAX_ID:
        raise ValidationError("Invalid todo ID")
    return todo_id


class TodoService:
    def __init__(self):
        self.repo = TodoRepository()

    async def create_todo(self, db: AsyncSession, user: CurrentUser, todo_in: TodoCreate) -> Todo:
        if not isinstance(todo_in.title, str):
            raise ValidationError("Title is required and must be a string")
        title = clean_title(todo_in.title, message="Title cannot be empty")

        try:
            todo = await self.repo.create_for_owner(db, user.id, title)
        except SQLAlchemyError:
            logger.exception("Todo creation failed for user %s", user.id)
            raise InternalError()
        logger.info("User %s created todo %s", user.id, todo.id)
        return todo

    async def list_todos(self, db: AsyncSession, user: CurrentUser) -> list[Todo]:
        try:
            return await self.repo.list_for_owner(db, user.id)
        except SQLAlchemyError:
            logger.exception("Todo listing failed for user %s", user.id)
            raise InternalError()

    async def update_todo(
        self, db: AsyncSession, user: CurrentUser, raw_id: str, todo_in: TodoUpdate
    ) -> Todo:
        todo_id = parse_todo_id(raw_id)
        values: dict[str, Any] = {}

        if "title" in todo_in.model_fields_set:
            values["title"] = clean_title(todo_in.title, message="Title must be a non-empty string")

        if "completed" in todo_in.model_fields_set:
            if not isinstance(todo_in.completed, bool):
                raise ValidationError("Completed must be a boolean")
            values["completed"] = todo_in.completed

        if not values:
            raise ValidationError("No valid fields to update")

        try:
            todo = await self.repo.update_owned(db, todo_id, user.id, values)
        except SQLAlchemyError:
            logger.exception("Todo update failed for user %s", user.id)
            raise InternalError()
        if todo is None:
            raise TodoNotFoundError()
        logger.info("User %s updated todo %s (%s)", user.id, todo_id, ", ".join(sorted(values)))
        return todo

    async def delete_todo(self, db: AsyncSession, user: CurrentUser, raw_id: str) -> None:
        todo_id = parse_todo_id(raw_id)
        try:
            deleted = await self.repo.delete_owned(db, todo_id, user.id)
        except SQLAlchemyError:
            logger.exception("Todo deletion failed for user %s", user.id)
            raise InternalError()
        if not deleted:
            raise TodoNotFoundError()
        logger.info("User %s deleted todo %s", user.id, todo_id)
