"""Base repositories: generic CRUD and tenant-scoped CRUD."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, update, delete.

    Writes only flush; the caller's transaction (get_db_transactional)
    commits or rolls back.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()


class TenantScopedRepository(BaseRepository[ModelType]):
    """Repository that enforces tenant isolation.

    All reads and writes are scoped to the tenant_id given at construction;
    rows of other tenants are invisible and cross-tenant writes are rejected.
    """

    def __init__(
        self, db: AsyncSession, model: type[ModelType], tenant_id: str
    ) -> None:
        super().__init__(db, model)
        self._tenant_id = tenant_id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    def _assert_tenant(self, obj: ModelType, operation: str) -> None:
        """Raise if obj.tenant_id does not match this repo's tenant."""
        if getattr(obj, "tenant_id", None) != self._tenant_id:
            raise ValidationException(
                f"Cannot {operation} entity belonging to another tenant",
                field="tenant_id",
            )

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key and tenant_id, or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(
                model.id == entity_id,
                model.tenant_id == self._tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records for this tenant, newest first, with pagination."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.tenant_id == self._tenant_id)
            .order_by(model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        self._assert_tenant(obj, "create")
        return await super().create(obj)

    async def update(self, obj: ModelType) -> ModelType:
        self._assert_tenant(obj, "update")
        return await super().update(obj)

    async def delete(self, obj: ModelType) -> None:
        self._assert_tenant(obj, "delete")
        await super().delete(obj)
