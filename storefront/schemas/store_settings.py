"""Schemas for the singleton store settings row."""

from datetime import datetime
from typing import ClassVar, Literal

from pydantic import Field, field_validator

from storefront.core.security import is_valid_hex_color, is_valid_phone
from storefront.schemas.common import PatchModel, ReadModel, blank_to_none

Currency = Literal["MXN", "USD", "EUR"]

DEFAULT_STORE_NAME = "FlexiShop"
DEFAULT_CURRENCY: Currency = "MXN"
DEFAULT_ACCENT_COLOR = "#000000"


class SettingsRead(ReadModel):
    id: Literal[1] = 1
    store_name: str = Field(default=DEFAULT_STORE_NAME, min_length=1)
    default_whatsapp: str | None = None
    currency: Currency = DEFAULT_CURRENCY
    accent_color: str = DEFAULT_ACCENT_COLOR
    created_at: datetime
    updated_at: datetime


class SettingsUpdate(PatchModel):
    """
    Partial settings update.

    accent_color must be the 6-digit #RRGGBB form; 3-digit colors are rejected
    rather than expanded.
    """

    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ("store_name",)
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"store_name", "currency", "accent_color"})

    store_name: str | None = Field(default=None, min_length=1, max_length=255)
    default_whatsapp: str | None = None
    currency: Currency | None = None
    accent_color: str | None = None

    @field_validator("accent_color")
    @classmethod
    def validate_accent_color(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_hex_color(v):
            raise ValueError("accent_color must be a hex color in #RRGGBB form")
        return v

    @field_validator("default_whatsapp", mode="before")
    @classmethod
    def blank_whatsapp_to_none(cls, v):
        return blank_to_none(v)

    @field_validator("default_whatsapp")
    @classmethod
    def validate_default_whatsapp(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_phone(v):
            raise ValueError("default_whatsapp must be 10-20 digits, spaces, '+', '-', '(' or ')'")
        return v
