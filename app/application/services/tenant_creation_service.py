"""Tenant creation: new tenant + first admin user."""

from __future__ import annotations

from app.application.dtos.tenant import TenantCreationResult
from app.application.interfaces.repositories import ITenantRepository, IUserRepository
from app.domain.enums import TenantStatus, UserRole
from app.domain.exceptions import TenantAlreadyExistsException


class TenantCreationService:
    """Creates a new tenant together with its admin user."""

    def __init__(
        self,
        tenant_repo: ITenantRepository,
        user_repo: IUserRepository,
    ) -> None:
        self.tenant_repo = tenant_repo
        self.user_repo = user_repo

    async def create_tenant(
        self,
        code: str,
        name: str,
        admin_email: str,
        admin_full_name: str,
        admin_password: str,
    ) -> TenantCreationResult:
        """Create tenant and its admin user.

        Caller must run this within a single DB transaction (transactional
        session dependency) so that tenant and admin user are created
        atomically. Recording the audit event is left to the caller, after
        this returns.
        """
        existing = await self.tenant_repo.get_by_code(code)
        if existing:
            raise TenantAlreadyExistsException(code)

        created_tenant = await self.tenant_repo.create_tenant(
            code=code,
            name=name,
            status=TenantStatus.ACTIVE,
        )
        admin_user = await self.user_repo.create_user(
            tenant_id=created_tenant.id,
            email=admin_email,
            full_name=admin_full_name,
            password=admin_password,
            role=UserRole.ADMIN.value,
        )
        return TenantCreationResult(
            tenant_id=created_tenant.id,
            tenant_code=created_tenant.code,
            tenant_name=created_tenant.name,
            admin_user_id=admin_user.id,
            admin_email=admin_user.email,
        )
