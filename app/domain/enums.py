"""Domain enumerations for Taskhub.

Enums represent fixed sets of domain values (tenant, project and task
states, user roles).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TenantStatus(_ValuesMixin, str, Enum):
    """Tenant lifecycle status."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    ARCHIVED = "archived"


class UserRole(_ValuesMixin, str, Enum):
    """Role of a user inside its tenant. Admins manage users and tenant settings."""

    ADMIN = "admin"
    USER = "user"


class ProjectStatus(_ValuesMixin, str, Enum):
    """Project status as shown in the project list."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    COMPLETED = "completed"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task progress."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
