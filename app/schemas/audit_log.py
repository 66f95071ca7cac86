"""Request/response schemas for audit log API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AuditLogEntryResponse(BaseModel):
    """Single audit event (read). metadata is the decoded JSON object."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    user_id: str
    action: str
    entity: str
    entity_id: str
    metadata: dict[str, Any]
    created_at: datetime


class AuditLogListResponse(BaseModel):
    """Paginated list of audit events, newest first."""

    items: list[AuditLogEntryResponse]
    total: int
    skip: int
    limit: int
