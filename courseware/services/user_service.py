"""
courseware/services/user_service.py
User management
"""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.errors import NotFoundError, ErrorCode
from courseware.orm.user import User

logger = logging.getLogger(__name__)


class UserService:
    """CRUD for learners. Deleting a user cascades to progress and achievements."""

    async def get(self, db: AsyncSession, user_id: int, lock: bool = False) -> User:
        """
        Fetch a user or raise 404.

        With lock=True the row is read FOR UPDATE so concurrent progress
        writes for the same user serialise.
        """
        query = select(User).where(User.id == user_id)
        if lock:
            query = query.with_for_update()
        result = await db.execute(query)
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User", user_id, code=ErrorCode.USER_NOT_FOUND)
        return user

    async def list(self, db: AsyncSession) -> List[User]:
        result = await db.execute(select(User).order_by(User.id.asc()))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, name: str) -> User:
        user = User(name=name)
        db.add(user)
        await db.commit()
        logger.info(f"Created user {user.id}")
        return user

    async def update(self, db: AsyncSession, user_id: int, name: str) -> User:
        user = await self.get(db, user_id, lock=True)
        user.name = name
        await db.commit()
        logger.info(f"Renamed user {user_id}")
        return user

    async def delete(self, db: AsyncSession, user_id: int) -> None:
        user = await self.get(db, user_id, lock=True)
        await db.delete(user)
        await db.commit()
        logger.info(f"Deleted user {user_id}")
