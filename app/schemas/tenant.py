"""Tenant API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

from app.domain.enums import TenantStatus
from app.schemas.common import reject_null


def _normalize_tenant_code(value: str) -> str:
    """Lowercase, no spaces, join with '-' (e.g. 'My Org' -> 'my-org')."""
    return "-".join(value.strip().lower().split())


class TenantCreateRequest(BaseModel):
    """Request body for creating a new tenant with its first admin user.

    Tenant code is normalized: lowercase, spaces replaced with '-'.
    """

    code: str = Field(
        ...,
        min_length=3,
        max_length=15,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Unique tenant code (normalized to lowercase, hyphen-separated slug)",
    )
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    admin_email: EmailStr
    admin_full_name: str = Field(..., min_length=1, max_length=255)
    admin_password: str = Field(..., min_length=8, description="Initial admin password (min 8 characters)")

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Normalize before pattern/length checks so e.g. 'My Org' becomes 'my-org'."""
        if not isinstance(v, str):
            return v
        return _normalize_tenant_code(v)


class TenantCreateResponse(BaseModel):
    """Response after tenant creation. The admin password is never returned."""

    tenant_id: str
    tenant_code: str
    tenant_name: str
    admin_user_id: str
    admin_email: str


class TenantUpdate(BaseModel):
    """Request body for updating a tenant (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    status: TenantStatus | None = None

    @field_validator("name", "status", mode="before")
    @classmethod
    def not_null(cls, v: Any, info: ValidationInfo) -> Any:
        return reject_null(v, info.field_name)


class TenantResponse(BaseModel):
    """Tenant in get/update responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    status: TenantStatus
