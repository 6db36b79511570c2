"""SQLAlchemy Declarative Base — shared base class for all ORM mappings.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata (used by alembic and tests)

Design Decisions:
    - Separate file for Base: avoids circular imports between models (ADR: SQLAlchemy best practice)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Tinta Fresca ORM models."""
    pass
