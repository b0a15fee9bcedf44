"""Pydantic request/response schemas (full, create and update variants per entity)."""

from storefront.schemas.auth import LoginRequest, SessionUser
from storefront.schemas.branches import BranchCreate, BranchRead, BranchUpdate
from storefront.schemas.common import ApiResponse, MessageResponse
from storefront.schemas.health import HealthStatus
from storefront.schemas.products import (
    ProductCreate,
    ProductImageRead,
    ProductImageUpload,
    ProductRead,
    ProductUpdate,
    StoredProductImage,
)
from storefront.schemas.store_settings import Currency, SettingsRead, SettingsUpdate
from storefront.schemas.users import UserCreate, UserCredentials, UserRead, UserRole, UserUpdate

__all__ = [
    "ApiResponse",
    "BranchCreate",
    "BranchRead",
    "BranchUpdate",
    "Currency",
    "HealthStatus",
    "LoginRequest",
    "MessageResponse",
    "ProductCreate",
    "ProductImageRead",
    "ProductImageUpload",
    "ProductRead",
    "ProductUpdate",
    "SessionUser",
    "SettingsRead",
    "SettingsUpdate",
    "StoredProductImage",
    "UserCreate",
    "UserCredentials",
    "UserRead",
    "UserRole",
    "UserUpdate",
]
