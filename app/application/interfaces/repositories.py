"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import TenantStatus

if TYPE_CHECKING:
    from app.application.dtos.tenant import TenantResult
    from app.application.dtos.user import UserResult


class ITenantRepository(Protocol):
    """Protocol for tenant repository (DIP)."""

    async def get_tenant(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by id or None."""

    async def get_by_code(self, code: str) -> TenantResult | None:
        """Return tenant by unique code or None."""

    async def create_tenant(
        self, code: str, name: str, status: TenantStatus = TenantStatus.ACTIVE
    ) -> TenantResult:
        """Create tenant; raise TenantAlreadyExistsException on duplicate code."""

    async def update_tenant(self, tenant_id: str, changes: dict[str, Any]) -> TenantResult:
        """Apply changes; raise TenantNotFoundException if missing."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id_and_tenant(self, user_id: str, tenant_id: str) -> UserResult | None:
        """Return user in tenant or None."""

    async def authenticate(
        self, email: str, tenant_id: str, password: str
    ) -> UserResult | None:
        """Return active user when credentials match, else None."""

    async def create_user(
        self,
        tenant_id: str,
        email: str,
        full_name: str,
        password: str,
        role: str = "user",
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException on duplicate email in tenant."""
