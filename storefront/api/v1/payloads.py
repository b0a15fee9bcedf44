"""Request-body and path helpers shared by the JSON endpoints."""

import json
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from storefront.core.config import settings
from storefront.core.exceptions import DataValidationError, PayloadTooLargeError
from storefront.core.security import contains_sql_injection, is_valid_uuid, validate_payload_size
from storefront.schemas.common import InputModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def declared_length(request: Request) -> int | None:
    """Content-Length header as an int, or None when absent or malformed."""
    raw = request.headers.get("content-length", "").strip()
    return int(raw) if raw.isdigit() else None


def require_uuid(value: str, label: str) -> str:
    """Reject non-UUID path ids with a 400 before any lookup."""
    if not is_valid_uuid(value):
        raise DataValidationError(f"Invalid {label} id")
    return value


def screen_free_text(model: BaseModel) -> None:
    """Run the SQL keyword screen over the model's free-text fields."""
    if not settings.SQL_INJECTION_SCREEN_ENABLED or not isinstance(model, InputModel):
        return
    for field, value in model.screened_values().items():
        if contains_sql_injection(value):
            raise DataValidationError(
                "Input contains forbidden characters or keywords",
                details=[
                    {
                        "field": field,
                        "message": "SQL keywords, comment markers and ';' are not allowed",
                        "type": "forbidden_pattern",
                    }
                ],
            )


async def read_json_body(request: Request, schema: type[ModelT]) -> ModelT:
    """
    Read, size-check, parse and validate a JSON object body.

    413 when the body exceeds MAX_JSON_BODY_BYTES (checked against
    Content-Length first, then against the bytes read); 400 for malformed JSON,
    a non-object body, schema violations or a screened free-text hit.
    """
    limit = settings.MAX_JSON_BODY_BYTES
    length = declared_length(request)
    if length is not None and length > limit:
        raise PayloadTooLargeError(f"Body must not exceed {limit} bytes")
    body = await request.body()
    if not validate_payload_size(body, limit):
        raise PayloadTooLargeError(f"Body must not exceed {limit} bytes")

    try:
        data = json.loads(body.decode("utf-8")) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataValidationError(f"Invalid JSON: {e!s}") from e
    if not isinstance(data, dict):
        raise DataValidationError("JSON body must be an object")

    try:
        model = schema.model_validate(data)
    except ValidationError as e:
        raise DataValidationError.from_pydantic(e) from e
    screen_free_text(model)
    return model
