from typing import Any

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.models.todo import Todo
from todo_api.repositories.base import BaseRepository


class TodoRepository(BaseRepository[Todo]):
    """Every query here is scoped by ``owner_id``."""

    def __init__(self):
        super().__init__(Todo)

    async def create_for_owner(self, db: AsyncSession, owner_id: int, title: str) -> Todo:
        return await self.create(db, Todo(owner_id=owner_id, title=title, completed=False))

    async def list_for_owner(self, db: AsyncSession, owner_id: int) -> list[Todo]:
        return await self.list(
            db,
            where={"owner_id": owner_id},
            order_by=(Todo.created_at.desc(), Todo.id.desc()),
        )

    async def get_owned(self, db: AsyncSession, todo_id: int, owner_id: int) -> Todo | None:
        return await self.find_one(db, id=todo_id, owner_id=owner_id)

    async def update_owned(
        self, db: AsyncSession, todo_id: int, owner_id: int, values: dict[str, Any]
    ) -> Todo | None:
        stmt = (
            update(Todo)
            .where(Todo.id == todo_id, Todo.owner_id == owner_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        res = await db.execute(stmt)
        await db.commit()
        if not res.rowcount:
            return None
        todo = await self.get_owned(db, todo_id, owner_id)
        if todo is not None:
            await db.refresh(todo)
        return todo

    async def delete_owned(self, db: AsyncSession, todo_id: int, owner_id: int) -> bool:
        return await self.delete_where(db, id=todo_id, owner_id=owner_id)
