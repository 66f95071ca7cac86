"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    TenantScopedRepository,
)
from app.infrastructure.persistence.repositories.project_repo import ProjectRepository
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "ProjectRepository",
    "TaskRepository",
    "TenantRepository",
    "TenantScopedRepository",
    "UserRepository",
]
