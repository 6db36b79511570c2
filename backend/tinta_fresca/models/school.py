"""School ORM — maps the store's `escuelas` table.

Invariants:
    - id is a store-assigned integer primary key
    - name, address, phone, school_email are non-nullable
    - active defaults to true

Design Decisions:
    - Table name kept as the store defines it; the store is shared with other clients
"""

from sqlalchemy import Boolean, Integer, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from tinta_fresca.db.base import Base


class School(Base):
    __tablename__ = "escuelas"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    school_email: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true(),
    )
