"""ORM Models — SQLAlchemy mappings of the store tables this API reads and writes.

Invariants:
    - All models inherit from Base (db/base.py)
    - No relationships: the store enforces referential integrity

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete for alembic and test fixtures
"""

from tinta_fresca.models.school import School  # noqa: F401
from tinta_fresca.models.user_profile import UserProfile  # noqa: F401
