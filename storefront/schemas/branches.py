"""Schemas for store branches."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field, field_validator

from storefront.core.security import is_valid_phone
from storefront.schemas.common import ActiveFlag, InputModel, PatchModel, ReadModel, blank_to_none


def _validate_phone(v: str | None) -> str | None:
    if v is not None and not is_valid_phone(v):
        raise ValueError("phone must be 10-20 digits, spaces, '+', '-', '(' or ')'")
    return v


class BranchRead(ReadModel):
    id: str
    name: str
    address: str | None = None
    phone: str | None = None
    is_active: ActiveFlag = 1
    created_at: datetime
    updated_at: datetime


class BranchCreate(InputModel):
    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "address")

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=1024)
    phone: str | None = None
    is_active: ActiveFlag = 1

    @field_validator("address", "phone", mode="before")
    @classmethod
    def blank_optional_text(cls, v):
        return blank_to_none(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return _validate_phone(v)


class BranchUpdate(PatchModel):
    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "address")
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"name", "is_active"})

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=1024)
    phone: str | None = None
    is_active: ActiveFlag | None = None

    @field_validator("address", "phone", mode="before")
    @classmethod
    def blank_optional_text(cls, v):
        return blank_to_none(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return _validate_phone(v)
