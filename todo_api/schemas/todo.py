from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, field_validator


class TodoCreate(BaseModel):
    title: Any = None


class TodoUpdate(BaseModel):
    # presence is read from model_fields_set; an explicit null still counts
    title: Any = None
    completed: Any = None


class TodoOut(BaseModel):
    id: int
    title: str
    completed: bool
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without tzinfo; they are stored as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TodoResponse(BaseModel):
    success: bool = True
    todo: TodoOut


class TodoListResponse(BaseModel):
    success: bool = True
    todos: list[TodoOut]


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "Todo deleted successfully"
