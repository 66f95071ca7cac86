"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    ProjectStatus,
    TaskPriority,
    TaskStatus,
    TenantStatus,
    UserRole,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TaskhubException,
    TenantAlreadyExistsException,
    TenantNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "ProjectStatus",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TaskPriority",
    "TaskStatus",
    "TaskhubException",
    "TenantAlreadyExistsException",
    "TenantNotFoundException",
    "TenantStatus",
    "UserAlreadyExistsException",
    "UserRole",
    "ValidationException",
]
