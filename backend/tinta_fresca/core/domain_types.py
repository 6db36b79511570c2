"""Domain Types — identity wrappers and the record fields the API knows about.

Invariants:
    - SchoolId is the store-assigned integer key; UserId is the identity provider's UUID
    - SchoolId fits the store's int4 key column (1..2**31-1); anything else cannot exist
    - SCHOOL_REQUIRED_FIELDS is the creation contract for schools

Design Decisions:
    - NewType over classes: zero runtime cost, mypy still catches swapped ids
"""

from typing import NewType
from uuid import UUID

from tinta_fresca.core.errors import ResourceNotFoundError

SchoolId = NewType("SchoolId", int)
UserId = NewType("UserId", UUID)

SCHOOL_ID_MAX = 2**31 - 1

SCHOOL_REQUIRED_FIELDS: tuple[str, ...] = (
    "name", "address", "phone", "school_email",
)
SCHOOL_UPDATABLE_FIELDS: tuple[str, ...] = (
    "name", "address", "phone", "school_email", "location", "active",
)


def existing_school_id(raw: int) -> SchoolId:
    """Narrow a path id to SchoolId; ids the key column cannot hold are not found."""
    if not 1 <= raw <= SCHOOL_ID_MAX:
        raise ResourceNotFoundError("School", str(raw))
    return SchoolId(raw)
