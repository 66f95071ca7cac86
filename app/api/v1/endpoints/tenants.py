"""Tenant API: bootstrap a tenant with its admin, read and update tenant settings."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_audit_trail,
    get_tenant_creation_service,
    get_tenant_repo,
    get_tenant_repo_for_write,
    get_verified_tenant_id,
    require_admin,
    verify_create_tenant_secret,
)
from app.application.dtos.user import UserResult
from app.application.services.tenant_creation_service import TenantCreationService
from app.core.limiter import limit_create_tenant
from app.domain.enums import UserRole
from app.domain.exceptions import TenantNotFoundException, ValidationException
from app.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from app.infrastructure.services import AuditTrailService
from app.schemas.common import DataResponse
from app.schemas.tenant import (
    TenantCreateRequest,
    TenantCreateResponse,
    TenantResponse,
    TenantUpdate,
)

router = APIRouter()


@router.post(
    "",
    response_model=DataResponse[TenantCreateResponse],
    status_code=201,
    dependencies=[Depends(verify_create_tenant_secret)],
)
@limit_create_tenant
async def create_tenant(
    request: Request,
    body: TenantCreateRequest,
    tenant_svc: Annotated[TenantCreationService, Depends(get_tenant_creation_service)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Create a new tenant with its first admin user.

    Protected by a shared secret header (X-Create-Tenant-Secret must match
    CREATE_TENANT_SECRET). The admin is recorded as the actor of its own
    creation since no authenticated user exists yet.
    """
    result = await tenant_svc.create_tenant(
        code=body.code,
        name=body.name,
        admin_email=body.admin_email,
        admin_full_name=body.admin_full_name,
        admin_password=body.admin_password,
    )
    await audit.log_user_created(
        result.tenant_id,
        result.admin_user_id,
        result.admin_user_id,
        {"email": result.admin_email, "role": UserRole.ADMIN.value, "bootstrap": True},
    )
    return DataResponse(
        data=TenantCreateResponse(
            tenant_id=result.tenant_id,
            tenant_code=result.tenant_code,
            tenant_name=result.tenant_name,
            admin_user_id=result.admin_user_id,
            admin_email=result.admin_email,
        )
    )


@router.get("/{tenant_id}", response_model=DataResponse[TenantResponse])
async def get_tenant(
    tenant_id: Annotated[str, Depends(get_verified_tenant_id)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
):
    """Get the caller's tenant. Path tenant_id must match the token tenant."""
    tenant = await tenant_repo.get_tenant(tenant_id)
    if not tenant:
        raise TenantNotFoundException(tenant_id)
    return DataResponse(data=TenantResponse.model_validate(tenant))


@router.put("/{tenant_id}", response_model=DataResponse[TenantResponse])
async def update_tenant(
    tenant_id: Annotated[str, Depends(get_verified_tenant_id)],
    body: TenantUpdate,
    current_user: Annotated[UserResult, Depends(require_admin)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Update tenant name and/or status (admin only)."""
    changes = body.model_dump(exclude_unset=True, mode="json")
    if not changes:
        raise ValidationException("No fields to update")
    tenant = await tenant_repo.update_tenant(tenant_id, changes)
    await audit.log_tenant_updated(tenant_id, current_user.id, {"changes": changes})
    return DataResponse(data=TenantResponse.model_validate(tenant))
