"""Audit log repository. Append-only: append, list and count; no update/delete."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import and_, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit_log import AuditLogResult
from app.infrastructure.persistence.models.audit_log import AuditLog
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

# Core table: the "metadata" column is mapped as AuditLog.metadata_ on the ORM side.
_AUDIT_TABLE = AuditLog.__table__


def _decode_metadata(raw: str | None) -> dict[str, Any]:
    """Decode stored JSON text; rows written outside the app may hold anything."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Audit log row has non-JSON metadata; returning it as 'raw'")
        return {"raw": raw}
    return value if isinstance(value, dict) else {"value": value}


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        tenant_id=row.tenant_id,
        user_id=row.user_id,
        action=row.action,
        entity=row.entity,
        entity_id=row.entity_id,
        metadata=_decode_metadata(row.metadata_),
        created_at=row.created_at,
    )


class AuditLogRepository:
    """Append-only audit log repository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def append(
        self,
        *,
        tenant_id: str,
        user_id: str,
        action: str,
        entity: str,
        entity_id: str,
        metadata: str,
    ) -> str:
        """Insert one row (single parameterized INSERT); return its id.

        metadata is already-serialized JSON text. created_at is set by the
        database.
        """
        row_id = generate_cuid()
        await self.db.execute(
            insert(_AUDIT_TABLE).values(
                id=row_id,
                tenant_id=tenant_id,
                user_id=user_id,
                action=action,
                entity=entity,
                entity_id=entity_id,
                metadata=metadata,
            )
        )
        return row_id

    @staticmethod
    def _conditions(
        tenant_id: str,
        entity: str | None,
        action: str | None,
        user_id: str | None,
        from_timestamp: datetime | None,
        to_timestamp: datetime | None,
    ) -> list[Any]:
        conditions = [AuditLog.tenant_id == tenant_id]
        if entity is not None:
            conditions.append(AuditLog.entity == entity)
        if action is not None:
            conditions.append(AuditLog.action == action)
        if user_id is not None:
            conditions.append(AuditLog.user_id == user_id)
        if from_timestamp is not None:
            conditions.append(AuditLog.created_at >= from_timestamp)
        if to_timestamp is not None:
            conditions.append(AuditLog.created_at <= to_timestamp)
        return conditions

    async def list(
        self,
        tenant_id: str,
        *,
        skip: int = 0,
        limit: int = 100,
        entity: str | None = None,
        action: str | None = None,
        user_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> list[AuditLogResult]:
        """List audit events for tenant with optional filters (newest first)."""
        conditions = self._conditions(
            tenant_id, entity, action, user_id, from_timestamp, to_timestamp
        )
        stmt = (
            select(AuditLog)
            .where(and_(*conditions))
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def count(
        self,
        tenant_id: str,
        *,
        entity: str | None = None,
        action: str | None = None,
        user_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> int:
        """Count audit events matching the same filters as list()."""
        conditions = self._conditions(
            tenant_id, entity, action, user_id, from_timestamp, to_timestamp
        )
        result = await self.db.execute(
            select(func.count()).select_from(AuditLog).where(and_(*conditions))
        )
        return int(result.scalar_one())
