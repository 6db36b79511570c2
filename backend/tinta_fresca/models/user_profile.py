"""User Profile ORM — maps the store's `Usuarios` table.

Invariants:
    - id equals the identity provider's user id (UUID); the row is created by the store
      when the provider creates the account, never by this service
    - name is the only column this service writes
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from tinta_fresca.db.base import Base


class UserProfile(Base):
    __tablename__ = "Usuarios"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True,
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
