"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from storefront.core.security import PASSWORD_MAX_LEN
from storefront.schemas.users import UserRole


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class SessionUser(BaseModel):
    """Identity stored in the session cookie and returned by login."""

    id: str
    email: str
    role: UserRole
