"""User API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

from app.domain.enums import UserRole
from app.schemas.common import reject_null


class UserCreateRequest(BaseModel):
    """Request body for adding a user to a tenant (admin only).

    full_name is also accepted as fullName, the key the web client sends.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255, alias="fullName")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    """Partial update. Omitted fields are left unchanged."""

    email: EmailStr | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=8)
    role: UserRole | None = None
    is_active: bool | None = None

    @field_validator("email", "full_name", "password", "role", "is_active", mode="before")
    @classmethod
    def not_null(cls, v: Any, info: ValidationInfo) -> Any:
        return reject_null(v, info.field_name)


class UserResponse(BaseModel):
    """User in responses. The password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    email: str
    full_name: str
    role: str
    is_active: bool
    created_at: datetime | None = None


class UserListResponse(BaseModel):
    users: list[UserResponse]
