"""Application DTOs (no ORM dependency)."""

from app.application.dtos.audit_log import AuditEventCreate, AuditLogResult
from app.application.dtos.project import ProjectResult
from app.application.dtos.task import TaskResult
from app.application.dtos.tenant import TenantCreationResult, TenantResult
from app.application.dtos.user import UserResult

__all__ = [
    "AuditEventCreate",
    "AuditLogResult",
    "ProjectResult",
    "TaskResult",
    "TenantCreationResult",
    "TenantResult",
    "UserResult",
]
