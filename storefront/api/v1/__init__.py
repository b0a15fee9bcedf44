"""API v1 routes."""

from fastapi import APIRouter

from storefront.api.v1 import auth, branches, health, product_images, products, store_settings, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(product_images.router, prefix="/products", tags=["product images"])
router.include_router(branches.router, prefix="/branches", tags=["branches"])
router.include_router(store_settings.router, prefix="/settings", tags=["settings"])
router.include_router(users.router, prefix="/users", tags=["users"])
