"""Store Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StoreError (core/errors.py) with the driver's message

Design Decisions:
    - Manager constructed by the app lifespan and kept on app.state, not in a module global
      (ADR: explicit injection, tests swap it via dependency_overrides)
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from tinta_fresca.core.errors import StoreError

logger = logging.getLogger(__name__)


def to_store_error(e: SQLAlchemyError, operation: str) -> StoreError:
    """Wrap a SQLAlchemy failure, keeping the store's own message."""
    orig = getattr(e, "orig", None) if isinstance(e, DBAPIError) else None
    message = str(orig) if orig is not None else str(e)
    return StoreError(message, operation)


@asynccontextmanager
async def store_operation(
    session: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Run one store operation; roll back and raise StoreError on failure."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Store {operation} failed: {e}")
        raise to_store_error(e, operation)


class DatabaseSessionManager:
    """Owns the process-wide store engine and hands out sessions."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 10, max_overflow: int = 5,
    ) -> "DatabaseSessionManager":
        """Build the pooled engine for a store URL."""
        return cls(create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        ))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Store error: {e}")
            raise to_store_error(e, "session")
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency for the manager created at startup."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for store sessions."""
    async with get_db_manager(request).session() as session:
        yield session
