from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.models.user import User
from todo_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def create_user(self, db: AsyncSession, email: str, password_hash: str) -> User:
        return await self.create(db, User(email=email, password_hash=password_hash))

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        return await self.find_one(db, email=email)

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        return await self.exists(db, email=email)
