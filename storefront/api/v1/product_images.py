"""Product image endpoints: binary GET is public, multipart upload and delete need an admin."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin
from storefront.api.v1.payloads import declared_length, require_uuid
from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.core.exceptions import (
    DataValidationError,
    NotFoundError,
    UploadTimeoutError,
)
from storefront.schemas.common import ApiResponse, MessageResponse
from storefront.schemas.products import ProductImageRead, ProductImageUpload
from storefront.schemas.users import UserRead
from storefront.services import product_images

logger = logging.getLogger(__name__)

router = APIRouter()

# Room for multipart boundaries and part headers on top of the file itself.
MULTIPART_OVERHEAD_BYTES = 16 * 1024


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def _read_upload(request: Request, limit: int) -> bytes:
    """Return at most limit + 1 bytes of the multipart 'file' field."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise DataValidationError("Content-Type must be multipart/form-data")
    form = await request.form()
    file = form.get("file")
    if file is None or not _is_upload_file(file):
        raise DataValidationError("Multipart request must include a 'file' field")
    try:
        return await file.read(limit + 1)
    finally:
        await file.close()


@router.get("/{product_id}/image")
def get_product_image(
    product_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Raw image bytes with a sniffed Content-Type."""
    require_uuid(product_id, "product")
    image = product_images.get(db, product_id)
    if image is None:
        raise NotFoundError("Image not found")
    return Response(
        content=image.png_bytes,
        media_type=product_images.detect_content_type(image.png_bytes),
        headers={"Content-Length": str(image.bytes_size)},
    )


@router.post(
    "/{product_id}/image",
    response_model=ApiResponse[ProductImageRead],
    status_code=status.HTTP_201_CREATED,
)
async def upload_product_image(
    product_id: str,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> ApiResponse[ProductImageRead]:
    """
    Create or replace a product's image.

    Send `Content-Type: multipart/form-data` with the image in a field named
    `file`. Oversized uploads are refused from Content-Length when possible and
    otherwise after reading one byte past the ceiling; nothing is written.
    """
    require_uuid(product_id, "product")
    limit = settings.MAX_IMAGE_BYTES
    length = declared_length(request)
    if length is not None and length > limit + MULTIPART_OVERHEAD_BYTES:
        product_images.check_size(length, limit)

    try:
        content = await asyncio.wait_for(
            _read_upload(request, limit), timeout=settings.IMAGE_UPLOAD_TIMEOUT_SEC
        )
    except TimeoutError as e:
        logger.warning("Image upload timed out for product_id=%s", product_id)
        raise UploadTimeoutError() from e

    product_images.check_size(len(content), limit)
    try:
        upload = ProductImageUpload(product_id=product_id, content=content)
    except ValidationError as e:
        raise DataValidationError.from_pydantic(e, "Uploaded file is empty") from e
    image = await run_in_threadpool(product_images.upsert, db, upload, max_bytes=limit)
    return ApiResponse(data=image)


@router.delete("/{product_id}/image", response_model=MessageResponse)
def delete_product_image(
    product_id: str,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> MessageResponse:
    require_uuid(product_id, "product")
    if not product_images.delete(db, product_id):
        raise NotFoundError("Image not found")
    return MessageResponse(message="Image deleted")
