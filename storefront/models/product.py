"""ORM models for catalog products and their single image."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Text,
)

from storefront.models.base import Base, new_uuid, utcnow


class Product(Base):
    """
    Catalog product. Prices are integer minor units (cents); never floats.
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_products_price_cents_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price_cents = Column(Integer, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Integer, nullable=False, default=1, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ProductImage(Base):
    """
    Raw image bytes for a product, one row per product (product_id is the key).

    The column keeps its historical name png_bytes; any image format is stored
    verbatim and the content type is sniffed on read.
    """

    __tablename__ = "product_image"

    product_id = Column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    png_bytes = Column(LargeBinary, nullable=False)
    bytes_size = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
