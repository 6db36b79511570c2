"""User Profile Repository — reads profile rows and writes display names.

Invariants:
    - Rows are never inserted or deleted here (the identity provider owns account lifecycle)
    - update_name() uses RETURNING: an empty result is the not-found sentinel
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tinta_fresca.core.domain_types import UserId
from tinta_fresca.infrastructure.database import store_operation
from tinta_fresca.models.user_profile import UserProfile


class SqlUserProfileRepository:
    """UserProfileRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self) -> list[UserProfile]:
        async with store_operation(self._db, "select"):
            result = await self._db.execute(select(UserProfile))
            return list(result.scalars().all())

    async def get(self, user_id: UserId) -> UserProfile | None:
        async with store_operation(self._db, "select"):
            result = await self._db.execute(
                select(UserProfile).where(UserProfile.id == user_id),
            )
            return result.scalar_one_or_none()

    async def update_name(self, user_id: UserId, name: str) -> UserProfile | None:
        async with store_operation(self._db, "update"):
            result = await self._db.execute(
                update(UserProfile)
                .where(UserProfile.id == user_id)
                .values(name=name)
                .returning(UserProfile),
            )
            profile = result.scalar_one_or_none()
            await self._db.commit()
        return profile
