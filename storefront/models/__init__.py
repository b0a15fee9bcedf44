"""SQLAlchemy ORM models."""

from storefront.models.base import Base
from storefront.models.branch import Branch
from storefront.models.product import Product, ProductImage
from storefront.models.store_settings import SETTINGS_ROW_ID, StoreSettings
from storefront.models.user import User

__all__ = [
    "Base",
    "Branch",
    "Product",
    "ProductImage",
    "SETTINGS_ROW_ID",
    "StoreSettings",
    "User",
]
