"""Shared schema building blocks: response envelope, flags, timestamps and patch semantics."""

from datetime import UTC, datetime
from typing import Annotated, Any, ClassVar, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

T = TypeVar("T")

# Largest value an INTEGER column holds on every supported backend.
MAX_INT32 = 2_147_483_647

# ?active= query value; anything but these two words is a 400.
ActiveFilter = Literal["true", "false"]

# 0/1 flag as stored in the database; booleans and numeric strings are rejected.
ActiveFlag = Annotated[StrictInt, Field(ge=0, le=1)]


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope for every JSON endpoint."""

    success: bool = True
    data: T | None = None
    error: str | None = None
    details: Any = None
    message: str | None = None


class MessageResponse(BaseModel):
    """Envelope for endpoints that return no entity (deletes, logout)."""

    success: bool = True
    message: str


class ReadModel(BaseModel):
    """Base for full (read) schemas built from ORM rows."""

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", mode="after", check_fields=False)
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is written in UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class InputModel(BaseModel):
    """
    Base for create/update payloads. Unknown keys are rejected.

    SCREENED_FIELDS names the free-text fields the request layer runs through
    the SQL keyword screen.
    """

    model_config = ConfigDict(extra="forbid")

    SCREENED_FIELDS: ClassVar[tuple[str, ...]] = ()

    def screened_values(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for name in self.SCREENED_FIELDS:
            value = getattr(self, name, None)
            if isinstance(value, str):
                out[name] = value
        return out


class PatchModel(InputModel):
    """
    Base for partial updates.

    Every field defaults to None, so "omitted" and "sent as null" are told apart
    by the set of fields the client actually sent (model_fields_set), never by
    the value. NON_NULLABLE fields may be omitted but not sent as null.
    """

    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required_columns(self):
        for name in sorted(self.model_fields_set & self.NON_NULLABLE):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """The change set: only fields present in the payload, with their new values."""
        return self.model_dump(exclude_unset=True)


def blank_to_none(v: Any) -> Any:
    """Empty or whitespace-only strings clear a nullable column."""
    if isinstance(v, str) and not v.strip():
        return None
    return v
