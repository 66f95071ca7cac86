"""DTOs for the audit trail (append-only)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditEventCreate:
    """Input for appending one audit event. recorded_at is assigned by the database."""

    tenant_id: str
    actor_id: str
    action: str
    entity_type: str
    entity_id: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit event (read-model for list). metadata is decoded JSON."""

    id: str
    tenant_id: str
    user_id: str
    action: str
    entity: str
    entity_id: str
    metadata: dict[str, Any]
    created_at: datetime
