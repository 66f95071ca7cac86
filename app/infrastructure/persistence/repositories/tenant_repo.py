"""Tenant repository. Methods return TenantResult DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.tenant import TenantResult
from app.domain.enums import TenantStatus
from app.domain.exceptions import TenantAlreadyExistsException, TenantNotFoundException
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.repositories.base import BaseRepository

_UPDATABLE_FIELDS = ("name", "status")


def _tenant_to_result(t: Tenant) -> TenantResult:
    return TenantResult(id=t.id, code=t.code, name=t.name, status=TenantStatus(t.status))


class TenantRepository(BaseRepository[Tenant]):
    """Tenant lookups by id/code, creation and partial update."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    async def get_tenant(self, tenant_id: str) -> TenantResult | None:
        tenant = await self.get_by_id(tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def get_by_code(self, code: str) -> TenantResult | None:
        result = await self.db.execute(select(Tenant).where(Tenant.code == code))
        tenant = result.scalar_one_or_none()
        return _tenant_to_result(tenant) if tenant else None

    async def create_tenant(
        self,
        code: str,
        name: str,
        status: TenantStatus = TenantStatus.ACTIVE,
    ) -> TenantResult:
        """Create tenant; raise TenantAlreadyExistsException on duplicate code."""
        tenant = Tenant(code=code, name=name, status=status.value)
        try:
            created = await self.create(tenant)
        except IntegrityError:
            raise TenantAlreadyExistsException(code) from None
        return _tenant_to_result(created)

    async def update_tenant(self, tenant_id: str, changes: dict[str, Any]) -> TenantResult:
        """Apply changes (name, status); raise TenantNotFoundException if missing."""
        tenant = await self.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        for key, value in changes.items():
            if key in _UPDATABLE_FIELDS:
                setattr(tenant, key, value)
        return _tenant_to_result(await self.update(tenant))
