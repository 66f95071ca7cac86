"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.audit_trail_service import (
    ACTION_ENTITY,
    AuditTrailService,
)

__all__ = ["ACTION_ENTITY", "AuditTrailService"]
