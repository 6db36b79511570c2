"""User Profiles — reads of the store's `Usuarios` table and display-name updates.

Invariants:
    - Name is stripped and must be non-empty (validated before the store is touched)
    - Unknown id on get/update → 404 RESOURCE_NOT_FOUND
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from tinta_fresca.api.dependencies import get_user_profile_repository
from tinta_fresca.core.domain_types import UserId
from tinta_fresca.core.errors import ResourceNotFoundError
from tinta_fresca.core.repository_protocols import UserProfileRepository
from tinta_fresca.schemas.user import (
    UserNameUpdate, UserProfileMutationResponse, UserProfileResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserProfileResponse])
async def list_user_profiles(
    repo: UserProfileRepository = Depends(get_user_profile_repository),
):
    profiles = await repo.list_all()
    logger.info("Listed user profiles", extra={"count": len(profiles)})
    return profiles


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: UUID,
    repo: UserProfileRepository = Depends(get_user_profile_repository),
):
    profile = await repo.get(UserId(user_id))
    if profile is None:
        raise ResourceNotFoundError("User", str(user_id))
    return profile


@router.put("/{user_id}/name", response_model=UserProfileMutationResponse)
async def update_user_name(
    user_id: UUID,
    body: UserNameUpdate,
    repo: UserProfileRepository = Depends(get_user_profile_repository),
):
    """Update a profile's display name.

    The caller is not matched against user_id; ownership checks belong to the store's
    row-level policies.
    """
    profile = await repo.update_name(UserId(user_id), body.name)
    if profile is None:
        raise ResourceNotFoundError("User", str(user_id))
    logger.info("Updated user name", extra={"user_id": str(user_id)})
    return UserProfileMutationResponse(
        message=f"User {user_id} name updated",
        data=UserProfileResponse.model_validate(profile),
    )
