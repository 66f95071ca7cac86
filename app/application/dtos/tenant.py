"""DTOs for tenants (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import TenantStatus


@dataclass(frozen=True)
class TenantResult:
    """Tenant read-model."""

    id: str
    code: str
    name: str
    status: TenantStatus


@dataclass(frozen=True)
class TenantCreationResult:
    """Result of bootstrapping a tenant with its first admin."""

    tenant_id: str
    tenant_code: str
    tenant_name: str
    admin_user_id: str
    admin_email: str
