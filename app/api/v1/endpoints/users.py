"""Tenant users API: list, add, update and remove users of the caller's tenant."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_audit_trail,
    get_user_repo,
    get_user_repo_for_write,
    get_verified_tenant_id,
    require_admin,
)
from app.application.dtos.user import UserResult
from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.infrastructure.services import AuditTrailService
from app.schemas.common import DataResponse
from app.schemas.user import UserCreateRequest, UserListResponse, UserResponse, UserUpdate

router = APIRouter()


@router.get("/{tenant_id}/users", response_model=DataResponse[UserListResponse])
async def list_users(
    tenant_id: Annotated[str, Depends(get_verified_tenant_id)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    users = await user_repo.get_users_by_tenant(tenant_id, skip=skip, limit=limit)
    return DataResponse(
        data=UserListResponse(users=[UserResponse.model_validate(u) for u in users])
    )


@router.post(
    "/{tenant_id}/users",
    response_model=DataResponse[UserResponse],
    status_code=201,
)
async def create_user(
    tenant_id: Annotated[str, Depends(get_verified_tenant_id)],
    body: UserCreateRequest,
    current_user: Annotated[UserResult, Depends(require_admin)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Add a user to the tenant (admin only)."""
    user = await user_repo.create_user(
        tenant_id=tenant_id,
        email=body.email,
        full_name=body.full_name,
        password=body.password,
        role=body.role.value,
    )
    await audit.log_user_created(
        tenant_id, current_user.id, user.id, {"email": user.email, "role": user.role}
    )
    return DataResponse(data=UserResponse.model_validate(user))


@router.put("/{tenant_id}/users/{user_id}", response_model=DataResponse[UserResponse])
async def update_user(
    tenant_id: Annotated[str, Depends(get_verified_tenant_id)],
    user_id: str,
    body: UserUpdate,
    current_user: Annotated[UserResult, Depends(require_admin)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Update a user of the tenant (admin only). Password changes are recorded without the value."""
    changes = body.model_dump(exclude_unset=True, mode="json")
    if not changes:
        raise ValidationException("No fields to update")
    user = await user_repo.update_user(user_id, tenant_id, changes)
    recorded = {k: v for k, v in changes.items() if k != "password"}
    metadata: dict = {"changes": recorded}
    if "password" in changes:
        metadata["password_changed"] = True
    await audit.log_user_updated(tenant_id, current_user.id, user.id, metadata)
    return DataResponse(data=UserResponse.model_validate(user))


@router.delete("/{tenant_id}/users/{user_id}", status_code=204)
async def delete_user(
    tenant_id: Annotated[str, Depends(get_verified_tenant_id)],
    user_id: str,
    current_user: Annotated[UserResult, Depends(require_admin)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Remove a user from the tenant (admin only; admins cannot remove themselves)."""
    if user_id == current_user.id:
        raise ValidationException("You cannot delete your own account", field="user_id")
    deleted = await user_repo.delete_user(user_id, tenant_id)
    await audit.log_user_deleted(
        tenant_id, current_user.id, deleted.id, {"email": deleted.email}
    )
