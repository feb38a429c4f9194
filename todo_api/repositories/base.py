from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")  # SQLAlchemy model class (Declarative)


class BaseRepository(Generic[T]):
    """
    SQLAlchemy 2.x / Async 用の共通リポジトリ（モデル専用）。
    - 書き込み系は commit → refresh まで行う（1リクエスト = 1操作）。
    """

    def __init__(self, model: type[T]) -> None:
        self.model = model

    # ------------------------ Read ------------------------

    async def get(self, session: AsyncSession, pk: Any) -> T | None:
        """主キー1件取得"""
        return await session.get(self.model, pk)

    async def find_one(self, session: AsyncSession, **filters: Any) -> T | None:
        """等価条件で1件取得"""
        stmt = select(self.model).filter_by(**filters).limit(1)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def exists(self, session: AsyncSession, **filters: Any) -> bool:
        """存在確認（等価条件のみ）"""
        stmt = select(func.count()).select_from(self.model).filter_by(**filters)
        res = await session.execute(stmt)
        return int(res.scalar_one()) > 0

    async def list(
        self,
        session: AsyncSession,
        *,
        where: dict[str, Any] | None = None,
        order_by: Sequence[InstrumentedAttribute] | None = None,
    ) -> list[T]:
        """一覧"""
        stmt = select(self.model)
        if where:
            stmt = stmt.filter_by(**where)
        if order_by:
            stmt = stmt.order_by(*order_by)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    # ------------------------ Write ------------------------

    async def create(self, session: AsyncSession, obj: T) -> T:
        """
        新規作成。transient（未管理/PKなし）のモデルのみ受け入れる。
        PK と server 側の既定値は refresh で反映される。
        """
        if not sa_inspect(obj).transient:
            raise ValueError("create(): expected a transient (new) SQLAlchemy model instance")
        session.add(obj)
        await session.commit()
        await session.refresh(obj)
        return obj

    async def delete_where(self, session: AsyncSession, **filters: Any) -> bool:
        """等価条件で削除（削除できたかを返す）"""
        stmt = sa_delete(self.model).filter_by(**filters)
        res = await session.execute(stmt)
        await session.commit()
        return (res.rowcount or 0) > 0
