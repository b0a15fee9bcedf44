"""Product data access."""

import logging

from sqlalchemy.orm import Session

from storefront.core.exceptions import NotFoundError
from storefront.models import Product, ProductImage
from storefront.models.base import new_uuid, utcnow
from storefront.schemas.products import ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)


def list_all(db: Session) -> list[ProductRead]:
    """All products, newest first (admin view)."""
    rows = db.query(Product).order_by(Product.created_at.desc()).all()
    return [ProductRead.model_validate(row) for row in rows]


def list_active(db: Session) -> list[ProductRead]:
    """Active products by name (catalog view)."""
    rows = db.query(Product).filter(Product.is_active == 1).order_by(Product.name.asc()).all()
    return [ProductRead.model_validate(row) for row in rows]


def get_by_id(db: Session, product_id: str) -> ProductRead | None:
    row = db.get(Product, product_id)
    return ProductRead.model_validate(row) if row is not None else None


def exists(db: Session, product_id: str) -> bool:
    return db.query(Product.id).filter(Product.id == product_id).first() is not None


def create(db: Session, data: ProductCreate) -> ProductRead:
    now = utcnow()
    row = Product(id=new_uuid(), created_at=now, updated_at=now, **data.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created product id=%s price_cents=%s", row.id, row.price_cents)
    return ProductRead.model_validate(row)


def update(db: Session, product_id: str, data: ProductUpdate) -> ProductRead:
    row = db.get(Product, product_id)
    if row is None:
        raise NotFoundError("Product not found")
    changes = data.changes()
    if not changes:
        return ProductRead.model_validate(row)
    for field, value in changes.items():
        setattr(row, field, value)
    row.updated_at = utcnow()
    db.commit()
    db.refresh(row)
    logger.info("Updated product id=%s fields=%s", product_id, sorted(changes))
    return ProductRead.model_validate(row)


def delete(db: Session, product_id: str) -> bool:
    """Hard delete; the product's image row goes with it."""
    # Explicit so SQLite (no FK enforcement by default) matches PostgreSQL's cascade.
    db.query(ProductImage).filter(ProductImage.product_id == product_id).delete(
        synchronize_session=False
    )
    deleted = db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info("Deleted product id=%s", product_id)
    return deleted > 0
