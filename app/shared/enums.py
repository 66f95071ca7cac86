"""Shared enumerations for the audit trail.

Cross-cutting enums used by application and infrastructure. Domain
enums (tenant, project, task status) live in app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditEntity(_ValuesMixin, str, Enum):
    """Kind of object an audit event refers to."""

    USER = "user"
    PROJECT = "project"
    TASK = "task"
    TENANT = "tenant"


class AuditAction(_ValuesMixin, str, Enum):
    """Closed vocabulary of audited actions (verb-noun codes).

    New actions are added together with their entity binding in
    app.infrastructure.services.audit_trail_service.ACTION_ENTITY.
    """

    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"
    CREATE_PROJECT = "CREATE_PROJECT"
    UPDATE_PROJECT = "UPDATE_PROJECT"
    DELETE_PROJECT = "DELETE_PROJECT"
    CREATE_TASK = "CREATE_TASK"
    UPDATE_TASK = "UPDATE_TASK"
    DELETE_TASK = "DELETE_TASK"
    UPDATE_TENANT = "UPDATE_TENANT"
    LOGIN = "LOGIN"
