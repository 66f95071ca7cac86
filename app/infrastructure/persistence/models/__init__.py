"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (Alembic
autogenerate and tests rely on it).
"""

from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.mixins import (
    CreatedByMixin,
    CuidMixin,
    MultiTenantModel,
    TenantMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.models.user import User

__all__ = [
    "AuditLog",
    "CreatedByMixin",
    "CuidMixin",
    "MultiTenantModel",
    "Project",
    "Task",
    "TenantMixin",
    "Tenant",
    "TimestampMixin",
    "User",
]
