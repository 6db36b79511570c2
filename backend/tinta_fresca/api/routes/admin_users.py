"""Admin User Management — identity-provider account admin behind the bearer-token guard.

Invariants:
    - Every route runs require_admin first (router-level dependency)
    - Each route issues exactly one identity-provider admin call
    - Provider 404 on delete → 404 RESOURCE_NOT_FOUND; any other provider failure → 500
      with the provider's message

Design Decisions:
    - DELETE returns 204: the provider returns no record to echo
    - Profile rows are not written here; the store creates them from the provider's user table
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from tinta_fresca.api.dependencies import get_identity_provider, require_admin
from tinta_fresca.core.errors import IdentityProviderError, ResourceNotFoundError
from tinta_fresca.core.repository_protocols import IdentityProvider
from tinta_fresca.schemas.user import AdminUserCreate

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin/users",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def list_users(
    request: Request,
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> list[dict[str, Any]]:
    users = await identity_provider.list_users()
    logger.info(
        "Listed identity-provider users",
        extra={"count": len(users), "user_id": request.state.user["id"]},
    )
    return users


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: AdminUserCreate,
    request: Request,
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> dict[str, Any]:
    user_metadata = {"name": body.name} if body.name else None
    user = await identity_provider.create_user(
        email=body.email,
        password=body.password,
        user_metadata=user_metadata,
        email_confirm=body.email_confirm,
    )
    logger.info(
        f"Created user {user.get('id')}",
        extra={"user_id": request.state.user["id"]},
    )
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    request: Request,
    identity_provider: IdentityProvider = Depends(get_identity_provider),
):
    try:
        await identity_provider.delete_user(str(user_id))
    except IdentityProviderError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise ResourceNotFoundError("User", str(user_id))
        raise
    logger.info(
        f"Deleted user {user_id}",
        extra={"user_id": request.state.user["id"]},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
