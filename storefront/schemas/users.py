"""Schemas for admin-panel users. The password never appears in a read schema."""

from datetime import datetime
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator

from storefront.core.security import PASSWORD_MAX_LEN, is_valid_email
from storefront.schemas.common import ActiveFlag, InputModel, PatchModel, ReadModel, blank_to_none

UserRole = Literal["admin", "editor"]
ADMIN_ROLE: UserRole = "admin"


def _validate_email(v: str | None) -> str | None:
    if v is None:
        return v
    if not is_valid_email(v):
        raise ValueError("email must be a valid address of at most 255 characters")
    return v


class UserRead(ReadModel):
    """Full user as returned by the API."""

    id: str
    email: str
    name: str | None = None
    role: UserRole = ADMIN_ROLE
    is_active: ActiveFlag = 1
    created_at: datetime
    updated_at: datetime


class UserCredentials(BaseModel):
    """Internal view used only to verify a login; carries the stored password."""

    model_config = {"from_attributes": True}

    id: str
    email: str
    password: str | None = None
    role: UserRole = ADMIN_ROLE
    is_active: int = 1


class UserCreate(InputModel):
    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("name",)

    email: str = Field(..., max_length=255)
    name: str | None = Field(default=None, max_length=255)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    role: UserRole = ADMIN_ROLE
    is_active: ActiveFlag = 1

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return _validate_email(v)

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_to_none(cls, v):
        return blank_to_none(v)


class UserUpdate(PatchModel):
    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("name",)
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"email", "password", "role", "is_active"})

    email: str | None = Field(default=None, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=PASSWORD_MAX_LEN)
    role: UserRole | None = None
    is_active: ActiveFlag | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return _validate_email(v)

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_to_none(cls, v):
        return blank_to_none(v)
