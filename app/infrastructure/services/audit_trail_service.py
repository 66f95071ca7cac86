"""Audit trail: best-effort, append-only record of who did what to which entity.

Recording is observability, not part of the audited operation. Every call
returns None: any failure (bad arguments, metadata that cannot be
serialized, database errors) is logged on this module's logger and
swallowed, and leaves no row behind. Each call checks out its own session
and commits its own one-row transaction, so it can neither roll back nor be
rolled back by the caller's transaction.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit_log import AuditEventCreate
from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.shared.enums import AuditAction, AuditEntity
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Single binding of every audited action to the entity type it affects.
ACTION_ENTITY: dict[AuditAction, AuditEntity] = {
    AuditAction.CREATE_USER: AuditEntity.USER,
    AuditAction.UPDATE_USER: AuditEntity.USER,
    AuditAction.DELETE_USER: AuditEntity.USER,
    AuditAction.LOGIN: AuditEntity.USER,
    AuditAction.CREATE_PROJECT: AuditEntity.PROJECT,
    AuditAction.UPDATE_PROJECT: AuditEntity.PROJECT,
    AuditAction.DELETE_PROJECT: AuditEntity.PROJECT,
    AuditAction.CREATE_TASK: AuditEntity.TASK,
    AuditAction.UPDATE_TASK: AuditEntity.TASK,
    AuditAction.DELETE_TASK: AuditEntity.TASK,
    AuditAction.UPDATE_TENANT: AuditEntity.TENANT,
}

REDACTED = "[REDACTED]"
_SENSITIVE_KEYS = frozenset(
    {"password", "hashed_password", "token", "access_token", "refresh_token", "secret"}
)

SessionFactory = Callable[[], AsyncSession]


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_metadata(metadata: Mapping[str, Any] | None) -> str:
    """Return metadata as JSON text ('{}' when empty), redacting secret keys.

    Raises:
        TypeError: metadata is not a mapping or holds a value JSON cannot encode.
        ValueError: metadata contains a circular reference.
    """
    if metadata is None:
        return "{}"
    if not isinstance(metadata, Mapping):
        raise TypeError(f"metadata must be a mapping, got {type(metadata).__name__}")
    payload = {
        str(key): REDACTED if str(key).lower() in _SENSITIVE_KEYS else value
        for key, value in metadata.items()
    }
    return json.dumps(payload, default=_json_default, separators=(",", ":"))


def _identifier(name: str, value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    return value


def build_audit_event(
    tenant_id: str,
    actor_id: str,
    action: AuditAction | str,
    entity_type: AuditEntity | str,
    entity_id: str,
    metadata: Mapping[str, Any] | None = None,
) -> AuditEventCreate:
    """Validate arguments and return the event to append.

    action must belong to AuditAction and entity_type to AuditEntity.

    Raises:
        ValueError: an identifier is empty or outside the vocabulary.
        TypeError: metadata is not a mapping.
    """
    if metadata is not None and not isinstance(metadata, Mapping):
        raise TypeError(f"metadata must be a mapping, got {type(metadata).__name__}")
    action_value = _identifier("action", action)
    entity_value = _identifier("entity_type", entity_type)
    if action_value not in AuditAction.values():
        raise ValueError(f"Unknown audit action: {action_value!r}")
    if entity_value not in AuditEntity.values():
        raise ValueError(f"Unknown audit entity type: {entity_value!r}")
    return AuditEventCreate(
        tenant_id=_identifier("tenant_id", tenant_id),
        actor_id=_identifier("actor_id", actor_id),
        action=action_value,
        entity_type=entity_value,
        entity_id=_identifier("entity_id", entity_id),
        metadata=dict(metadata or {}),
    )


class AuditTrailService:
    """Records audit events; never raises to its caller.

    Pass the shared async_sessionmaker (or any zero-argument callable that
    returns an AsyncSession usable as an async context manager).
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def record(
        self,
        tenant_id: str,
        actor_id: str,
        action: AuditAction | str,
        entity_type: AuditEntity | str,
        entity_id: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """Append one audit event. Failures are logged and swallowed (observability only)."""
        try:
            event = build_audit_event(
                tenant_id, actor_id, action, entity_type, entity_id, metadata
            )
            serialized = serialize_metadata(event.metadata)
            async with self._session_factory() as session:
                async with session.begin():
                    await AuditLogRepository(session).append(
                        tenant_id=event.tenant_id,
                        user_id=event.actor_id,
                        action=event.action,
                        entity=event.entity_type,
                        entity_id=event.entity_id,
                        metadata=serialized,
                    )
        except Exception as e:
            logger.error(
                "Failed to record audit event %s on %s %s: %s",
                getattr(action, "value", action),
                getattr(entity_type, "value", entity_type),
                entity_id,
                e,
            )
            return
        logger.debug(
            "Recorded audit event %s on %s %s (tenant %s, actor %s)",
            event.action,
            event.entity_type,
            event.entity_id,
            event.tenant_id,
            event.actor_id,
        )

    async def _record_bound(
        self,
        action: AuditAction,
        tenant_id: str,
        actor_id: str,
        entity_id: str,
        metadata: Mapping[str, Any] | None,
    ) -> None:
        await self.record(
            tenant_id, actor_id, action, ACTION_ENTITY[action], entity_id, metadata
        )

    async def log_user_created(
        self, tenant_id: str, actor_id: str, new_user_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.CREATE_USER, tenant_id, actor_id, new_user_id, metadata)

    async def log_user_updated(
        self, tenant_id: str, actor_id: str, updated_user_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.UPDATE_USER, tenant_id, actor_id, updated_user_id, metadata)

    async def log_user_deleted(
        self, tenant_id: str, actor_id: str, deleted_user_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.DELETE_USER, tenant_id, actor_id, deleted_user_id, metadata)

    async def log_project_created(
        self, tenant_id: str, actor_id: str, project_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.CREATE_PROJECT, tenant_id, actor_id, project_id, metadata)

    async def log_project_updated(
        self, tenant_id: str, actor_id: str, project_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.UPDATE_PROJECT, tenant_id, actor_id, project_id, metadata)

    async def log_project_deleted(
        self, tenant_id: str, actor_id: str, project_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.DELETE_PROJECT, tenant_id, actor_id, project_id, metadata)

    async def log_task_created(
        self, tenant_id: str, actor_id: str, task_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.CREATE_TASK, tenant_id, actor_id, task_id, metadata)

    async def log_task_updated(
        self, tenant_id: str, actor_id: str, task_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.UPDATE_TASK, tenant_id, actor_id, task_id, metadata)

    async def log_task_deleted(
        self, tenant_id: str, actor_id: str, task_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        await self._record_bound(AuditAction.DELETE_TASK, tenant_id, actor_id, task_id, metadata)

    async def log_tenant_updated(
        self, tenant_id: str, actor_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        """Tenant settings changed; the tenant itself is the affected entity."""
        await self._record_bound(AuditAction.UPDATE_TENANT, tenant_id, actor_id, tenant_id, metadata)

    async def log_login(
        self, tenant_id: str, actor_id: str, metadata: Mapping[str, Any] | None = None
    ) -> None:
        """User signed in; the user is both actor and affected entity."""
        await self._record_bound(AuditAction.LOGIN, tenant_id, actor_id, actor_id, metadata)
