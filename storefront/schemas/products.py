"""Schemas for catalog products and product images."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field, StrictInt, field_validator

from storefront.schemas.common import MAX_INT32, ActiveFlag, InputModel, PatchModel, ReadModel, blank_to_none


class ProductRead(ReadModel):
    """Full product. price_cents is integer minor units of the store currency."""

    id: str
    name: str
    description: str | None = None
    price_cents: StrictInt = Field(..., ge=0, le=MAX_INT32)
    stock: StrictInt = Field(default=0, ge=0, le=MAX_INT32)
    is_active: ActiveFlag = 1
    created_at: datetime
    updated_at: datetime


class ProductCreate(InputModel):
    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "description")

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price_cents: StrictInt = Field(..., ge=0, le=MAX_INT32, description="Price in minor units (cents).")
    stock: StrictInt = Field(default=0, ge=0, le=MAX_INT32)
    is_active: ActiveFlag = 1

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_to_none(cls, v):
        return blank_to_none(v)


class ProductUpdate(PatchModel):
    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "description")
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"name", "price_cents", "stock", "is_active"})

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price_cents: StrictInt | None = Field(default=None, ge=0, le=MAX_INT32)
    stock: StrictInt | None = Field(default=None, ge=0, le=MAX_INT32)
    is_active: ActiveFlag | None = None

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_to_none(cls, v):
        return blank_to_none(v)


class ProductImageRead(ReadModel):
    """Image metadata; the bytes themselves are served by GET /products/{id}/image."""

    product_id: str
    bytes_size: int = Field(..., gt=0)
    content_type: str
    updated_at: datetime


class ProductImageUpload(BaseModel):
    """Validated upload ready to be written: non-empty bytes for an existing product id."""

    product_id: str
    content: bytes = Field(..., min_length=1)

    @property
    def bytes_size(self) -> int:
        return len(self.content)


class StoredProductImage(ReadModel):
    """Full image row, bytes included, as read back from the database."""

    product_id: str
    png_bytes: bytes
    bytes_size: int = Field(..., gt=0)
    updated_at: datetime
