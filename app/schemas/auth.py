"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Request body for login. Users identify tenant by code (e.g. org slug), not internal tenant_id."""

    tenant_code: str = Field(
        ...,
        min_length=1,
        description="Tenant code (e.g. org slug) to identify the tenant",
    )
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response with the signed-in user."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
