"""Audit log API: list tenant-scoped audit events (who did what, when)."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_audit_log_repo, require_admin
from app.application.dtos.user import UserResult
from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from app.schemas.common import DataResponse
from app.shared.enums import AuditAction, AuditEntity

router = APIRouter()


@router.get("", response_model=DataResponse[AuditLogListResponse])
async def list_audit_log(
    current_user: Annotated[UserResult, Depends(require_admin)],
    audit_repo: Annotated[AuditLogRepository, Depends(get_audit_log_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    entity: AuditEntity | None = Query(None, description="Filter by entity type"),
    action: AuditAction | None = Query(None, description="Filter by action"),
    user_id: str | None = Query(None, description="Filter by actor id"),
    from_timestamp: datetime | None = Query(None, description="From (inclusive) ISO8601"),
    to_timestamp: datetime | None = Query(None, description="To (inclusive) ISO8601"),
):
    """List audit events for the caller's tenant (admin only, newest first)."""
    filters = {
        "entity": entity.value if entity else None,
        "action": action.value if action else None,
        "user_id": user_id,
        "from_timestamp": from_timestamp,
        "to_timestamp": to_timestamp,
    }
    items = await audit_repo.list(
        current_user.tenant_id, skip=skip, limit=limit, **filters
    )
    total = await audit_repo.count(current_user.tenant_id, **filters)
    return DataResponse(
        data=AuditLogListResponse(
            items=[AuditLogEntryResponse.model_validate(e) for e in items],
            total=total,
            skip=skip,
            limit=limit,
        )
    )
