"""Alembic environment — schema for `escuelas` and `Usuarios` on local and dev stores.

The hosted store owns its own schema; these migrations exist so a local Postgres
(or a scratch SQLite file) has the two tables the API reads and writes.

Design Decisions:
    - URL precedence: -x url=... on the command line, then DATABASE_URL, then alembic.ini
    - The URL goes through config.asyncpg_url, the same rewrite the app applies
    - compare_type on: column type drift shows up in autogenerate
"""

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from tinta_fresca.config import asyncpg_url
from tinta_fresca.db.base import Base
import tinta_fresca.models  # noqa: F401  registers School and UserProfile

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _store_url() -> str:
    url = (
        context.get_x_argument(as_dictionary=True).get("url")
        or os.environ.get("DATABASE_URL")
        or config.get_main_option("sqlalchemy.url")
    )
    return asyncpg_url(url)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata, compare_type=True, **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )


async def _migrate_online() -> None:
    engine = create_async_engine(_store_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=_store_url(), literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
