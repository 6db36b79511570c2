"""Schools — CRUD passthrough to the store's `escuelas` table.

Invariants:
    - Missing required fields on create → 400 BAD_INPUT, store not called
    - Update with no fields → 400 BAD_INPUT, store not called
    - Empty result on get/update/delete → 404 RESOURCE_NOT_FOUND
    - Ids outside the key column range → 404 without touching the store
    - Store failures surface as 500 STORE_ERROR with the store's message
"""

import logging

from fastapi import APIRouter, Depends, status

from tinta_fresca.api.dependencies import get_school_repository
from tinta_fresca.core.domain_types import (
    SCHOOL_REQUIRED_FIELDS, SCHOOL_UPDATABLE_FIELDS, existing_school_id,
)
from tinta_fresca.core.errors import BadInputError, ResourceNotFoundError
from tinta_fresca.core.partial_update import collect_changes, missing_fields
from tinta_fresca.core.repository_protocols import SchoolRepository
from tinta_fresca.schemas.school import (
    SchoolCreate, SchoolMutationResponse, SchoolResponse, SchoolUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/schools", tags=["schools"])


@router.get("", response_model=list[SchoolResponse])
async def list_schools(
    repo: SchoolRepository = Depends(get_school_repository),
):
    schools = await repo.list_all()
    logger.info("Listed schools", extra={"count": len(schools)})
    return schools


@router.get("/{school_id}", response_model=SchoolResponse)
async def get_school(
    school_id: int,
    repo: SchoolRepository = Depends(get_school_repository),
):
    school = await repo.get(existing_school_id(school_id))
    if school is None:
        raise ResourceNotFoundError("School", str(school_id))
    return school


@router.post(
    "", response_model=SchoolResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_school(
    body: SchoolCreate,
    repo: SchoolRepository = Depends(get_school_repository),
):
    fields = body.model_dump()
    missing = missing_fields(fields, SCHOOL_REQUIRED_FIELDS)
    if missing:
        raise BadInputError(
            f"Missing required fields: {', '.join(missing)}", fields=missing,
        )
    school = await repo.create(fields)
    logger.info(
        f"Created school '{school.name}'", extra={"resource_id": school.id},
    )
    return school


@router.put("/{school_id}", response_model=SchoolMutationResponse)
async def update_school(
    school_id: int,
    body: SchoolUpdate,
    repo: SchoolRepository = Depends(get_school_repository),
):
    key = existing_school_id(school_id)
    changes = collect_changes(
        body.model_dump(exclude_unset=True), SCHOOL_UPDATABLE_FIELDS,
    )
    school = await repo.update(key, changes)
    if school is None:
        raise ResourceNotFoundError("School", str(school_id))
    logger.info(
        f"Updated school fields: {', '.join(sorted(changes))}",
        extra={"resource_id": school_id},
    )
    return SchoolMutationResponse(
        message=f"School {school_id} updated",
        data=SchoolResponse.model_validate(school),
    )


@router.delete("/{school_id}", response_model=SchoolMutationResponse)
async def delete_school(
    school_id: int,
    repo: SchoolRepository = Depends(get_school_repository),
):
    school = await repo.delete(existing_school_id(school_id))
    if school is None:
        raise ResourceNotFoundError("School", str(school_id))
    logger.info("Deleted school", extra={"resource_id": school_id})
    return SchoolMutationResponse(
        message=f"School {school_id} deleted",
        data=SchoolResponse.model_validate(school),
    )
