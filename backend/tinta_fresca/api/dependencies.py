"""API Dependencies — injection of store repositories, identity provider, and the admin guard.

Invariants:
    - Collaborators come from app.state (populated by the lifespan), never from module globals
    - require_admin rejects before any store or provider admin call runs
    - On success the verified identity is attached to request.state.user

Design Decisions:
    - HTTPBearer(auto_error=False): the guard raises UnauthenticatedError itself so the
      401 body has the same envelope as every other API error
    - Role check only when ADMIN_ROLE is configured; authentication alone otherwise
"""

import logging
from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tinta_fresca.config import Settings
from tinta_fresca.core.errors import (
    ForbiddenError, IdentityProviderError, UnauthenticatedError,
)
from tinta_fresca.core.repository_protocols import (
    IdentityProvider, SchoolRepository, UserProfileRepository,
)
from tinta_fresca.infrastructure.database import get_db
from tinta_fresca.services.school_repository import SqlSchoolRepository
from tinta_fresca.services.user_profile_repository import SqlUserProfileRepository

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_provider(request: Request) -> IdentityProvider:
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        raise RuntimeError("Identity provider not initialized")
    return provider


def get_school_repository(
    db: AsyncSession = Depends(get_db),
) -> SchoolRepository:
    return SqlSchoolRepository(db)


def get_user_profile_repository(
    db: AsyncSession = Depends(get_db),
) -> UserProfileRepository:
    return SqlUserProfileRepository(db)


def _role_of(identity: dict[str, Any]) -> str | None:
    app_metadata = identity.get("app_metadata") or {}
    return app_metadata.get("role")


async def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """Verify the bearer token with the identity provider."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("No token provided")

    try:
        identity = await identity_provider.get_user(credentials.credentials)
    except IdentityProviderError as e:
        logger.warning(
            f"Token verification failed: {e.message}",
            extra={"path": request.url.path},
        )
        raise UnauthenticatedError("Invalid or expired token")

    if not identity or not identity.get("id"):
        raise UnauthenticatedError("Invalid or expired token")

    if settings.admin_role and _role_of(identity) != settings.admin_role:
        logger.warning(
            "Authenticated identity lacks admin role",
            extra={"user_id": identity["id"], "path": request.url.path},
        )
        raise ForbiddenError(f"Role '{settings.admin_role}' required")

    request.state.user = identity
    return identity
