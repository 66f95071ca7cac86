"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

import asyncio
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole
from app.domain.exceptions import ResourceNotFoundException, UserAlreadyExistsException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash, verify_password

_UPDATABLE_FIELDS = ("email", "full_name", "role", "is_active")

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        tenant_id=u.tenant_id,
        email=u.email,
        full_name=u.full_name,
        role=u.role,
        is_active=u.is_active,
        created_at=u.created_at,
    )


class UserRepository(BaseRepository[User]):
    """User repository. authenticate, create_user, update_user, delete_user."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email_and_tenant(self, email: str, tenant_id: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email.lower(), User.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(self, user_id: str, tenant_id: str) -> UserResult | None:
        user = await self._get_entity(user_id, tenant_id)
        return _user_to_result(user) if user else None

    async def _get_entity(self, user_id: str, tenant_id: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def _get_or_raise(self, user_id: str, tenant_id: str) -> User:
        user = await self._get_entity(user_id, tenant_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def authenticate(
        self, email: str, tenant_id: str, password: str
    ) -> UserResult | None:
        """Return the user when email/password match an active user of the tenant."""
        user = await self.get_by_email_and_tenant(email, tenant_id)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        tenant_id: str,
        email: str,
        full_name: str,
        password: str,
        role: str = UserRole.USER.value,
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException on duplicate email in tenant."""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            tenant_id=tenant_id,
            email=email.lower(),
            full_name=full_name,
            hashed_password=hashed,
            role=role,
            is_active=True,
        )
        try:
            created = await self.create(user)
        except IntegrityError:
            raise UserAlreadyExistsException() from None
        return _user_to_result(created)

    async def update_user(
        self, user_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> UserResult:
        """Apply changes (email, full_name, role, is_active, password)."""
        user = await self._get_or_raise(user_id, tenant_id)
        for key, value in changes.items():
            if key in _UPDATABLE_FIELDS:
                setattr(user, key, value.lower() if key == "email" else value)
        if changes.get("password"):
            user.hashed_password = await asyncio.to_thread(
                get_password_hash, changes["password"]
            )
        try:
            updated = await self.update(user)
        except IntegrityError:
            raise UserAlreadyExistsException() from None
        return _user_to_result(updated)

    async def delete_user(self, user_id: str, tenant_id: str) -> UserResult:
        user = await self._get_or_raise(user_id, tenant_id)
        snapshot = _user_to_result(user)
        await self.delete(user)
        return snapshot

    async def get_users_by_tenant(
        self, tenant_id: str, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        result = await self.db.execute(
            select(User)
            .where(User.tenant_id == tenant_id)
            .order_by(User.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_user_to_result(u) for u in result.scalars().all()]
