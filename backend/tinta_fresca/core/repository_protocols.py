"""Boundary Protocols — contracts between the route handlers and the external collaborators.

Invariants:
    - Routes depend on these Protocols, never on SQLAlchemy or httpx directly
    - Every repository method issues exactly one store operation
    - "Not found" is signalled by None, never by an exception, so the route decides the 404

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests inject plain fakes (ADR: ExMA anti-pattern)
    - Records cross the boundary as ORM objects or provider dicts; no DTO layer in between
"""

from typing import Any, Protocol

from tinta_fresca.core.domain_types import SchoolId, UserId


class SchoolLike(Protocol):
    """Structural contract for school records returned by the store."""
    id: int
    name: str
    address: str
    phone: str
    school_email: str
    location: str | None
    active: bool


class UserProfileLike(Protocol):
    """Structural contract for user profile rows returned by the store."""
    id: Any
    name: str | None


class SchoolRepository(Protocol):
    """Contract for school persistence — implemented by services/."""
    async def list_all(self) -> list[SchoolLike]: ...
    async def get(self, school_id: SchoolId) -> SchoolLike | None: ...
    async def create(self, fields: dict[str, Any]) -> SchoolLike: ...
    async def update(
        self, school_id: SchoolId, changes: dict[str, Any],
    ) -> SchoolLike | None: ...
    async def delete(self, school_id: SchoolId) -> SchoolLike | None: ...


class UserProfileRepository(Protocol):
    """Contract for user profile persistence — implemented by services/."""
    async def list_all(self) -> list[UserProfileLike]: ...
    async def get(self, user_id: UserId) -> UserProfileLike | None: ...
    async def update_name(
        self, user_id: UserId, name: str,
    ) -> UserProfileLike | None: ...


class IdentityProvider(Protocol):
    """Contract for the external identity provider — implemented by infrastructure/."""
    async def get_user(self, token: str) -> dict[str, Any]: ...
    async def list_users(self) -> list[dict[str, Any]]: ...
    async def create_user(
        self,
        email: str,
        password: str,
        user_metadata: dict[str, Any] | None = None,
        email_confirm: bool = True,
    ) -> dict[str, Any]: ...
    async def delete_user(self, user_id: str) -> None: ...
