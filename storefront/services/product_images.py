"""
Product image storage: one binary row per product, written with an upsert.

Bytes are stored exactly as uploaded. The content type served back is sniffed
from the leading magic bytes; nothing here decodes or re-encodes the image.
"""

import logging

from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.database import dialect_insert
from storefront.core.exceptions import NotFoundError, PayloadTooLargeError, UpstreamError
from storefront.models import ProductImage
from storefront.models.base import utcnow
from storefront.schemas.products import ProductImageRead, ProductImageUpload, StoredProductImage
from storefront.services import products

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

PNG_MAGIC = b"\x89PNG"
JPEG_MAGIC = b"\xff\xd8\xff"
GIF_MAGIC = b"GIF8"
RIFF_MAGIC = b"RIFF"
WEBP_MAGIC = b"WEBP"
SVG_PREFIXES = (b"<svg", b"<?xml")


def detect_content_type(data: bytes) -> str:
    """Map leading magic bytes to a MIME type; unknown data is application/octet-stream."""
    if data.startswith(PNG_MAGIC):
        return "image/png"
    if data.startswith(JPEG_MAGIC):
        return "image/jpeg"
    if data.startswith(GIF_MAGIC):
        return "image/gif"
    if data[:4] == RIFF_MAGIC and data[8:12] == WEBP_MAGIC:
        return "image/webp"
    head = data[:256].lstrip(b"\xef\xbb\xbf").lstrip().lower()
    if head.startswith(SVG_PREFIXES):
        return "image/svg+xml"
    return DEFAULT_CONTENT_TYPE


def check_size(size: int, max_bytes: int | None = None) -> None:
    """Raise PayloadTooLargeError when size exceeds the ceiling. Call before any I/O."""
    limit = max_bytes if max_bytes is not None else settings.MAX_IMAGE_BYTES
    if size > limit:
        raise PayloadTooLargeError(f"Image must not exceed {limit} bytes")


def to_read(image: StoredProductImage) -> ProductImageRead:
    return ProductImageRead(
        product_id=image.product_id,
        bytes_size=image.bytes_size,
        content_type=detect_content_type(image.png_bytes),
        updated_at=image.updated_at,
    )


def get(db: Session, product_id: str) -> StoredProductImage | None:
    row = db.get(ProductImage, product_id)
    return StoredProductImage.model_validate(row) if row is not None else None


def upsert(db: Session, upload: ProductImageUpload, max_bytes: int | None = None) -> ProductImageRead:
    """
    Insert or replace the product's image.

    Raises PayloadTooLargeError before touching the database when the upload is
    over the ceiling, and NotFoundError when the product does not exist.
    """
    check_size(upload.bytes_size, max_bytes)
    if not products.exists(db, upload.product_id):
        raise NotFoundError("Product not found")

    insert = dialect_insert(db)
    stmt = insert(ProductImage).values(
        product_id=upload.product_id,
        png_bytes=upload.content,
        bytes_size=upload.bytes_size,
        updated_at=utcnow(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[ProductImage.product_id],
        set_={
            "png_bytes": stmt.excluded.png_bytes,
            "bytes_size": stmt.excluded.bytes_size,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    db.execute(stmt)
    db.commit()

    stored = get(db, upload.product_id)
    if stored is None:
        raise UpstreamError("Image row missing after upsert")
    logger.info("Stored image product_id=%s bytes=%s", upload.product_id, upload.bytes_size)
    return to_read(stored)


def delete(db: Session, product_id: str) -> bool:
    deleted = (
        db.query(ProductImage)
        .filter(ProductImage.product_id == product_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("Deleted image product_id=%s", product_id)
    return deleted > 0
