"""School Repository — one store operation per method against the `escuelas` table.

Invariants:
    - Each method issues exactly one statement (select / insert / update / delete)
    - update() and delete() use RETURNING: an empty result is the not-found sentinel
    - Any SQLAlchemy failure rolls back and surfaces as StoreError with the store's message

Design Decisions:
    - RETURNING over select-then-write: keeps the single-operation contract and avoids
      a read/write race between two statements
"""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tinta_fresca.core.domain_types import SchoolId
from tinta_fresca.infrastructure.database import store_operation
from tinta_fresca.models.school import School


class SqlSchoolRepository:
    """SchoolRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self) -> list[School]:
        async with store_operation(self._db, "select"):
            result = await self._db.execute(select(School).order_by(School.id))
            return list(result.scalars().all())

    async def get(self, school_id: SchoolId) -> School | None:
        async with store_operation(self._db, "select"):
            result = await self._db.execute(
                select(School).where(School.id == school_id),
            )
            return result.scalar_one_or_none()

    async def create(self, fields: dict[str, Any]) -> School:
        school = School(**fields)
        async with store_operation(self._db, "insert"):
            self._db.add(school)
            await self._db.commit()
            await self._db.refresh(school)
        return school

    async def update(
        self, school_id: SchoolId, changes: dict[str, Any],
    ) -> School | None:
        async with store_operation(self._db, "update"):
            result = await self._db.execute(
                update(School)
                .where(School.id == school_id)
                .values(**changes)
                .returning(School),
            )
            school = result.scalar_one_or_none()
            await self._db.commit()
        return school

    async def delete(self, school_id: SchoolId) -> School | None:
        async with store_operation(self._db, "delete"):
            result = await self._db.execute(
                delete(School).where(School.id == school_id).returning(School),
            )
            school = result.scalar_one_or_none()
            await self._db.commit()
        return school
