"""Product catalog endpoints. Reads are public; writes require an admin session."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin
from storefront.api.v1.payloads import read_json_body, require_uuid
from storefront.core.database import get_db
from storefront.core.exceptions import NotFoundError
from storefront.schemas.common import ActiveFilter, ApiResponse, MessageResponse
from storefront.schemas.products import ProductCreate, ProductRead, ProductUpdate
from storefront.schemas.users import UserRead
from storefront.services import products

router = APIRouter()


@router.get("", response_model=ApiResponse[list[ProductRead]])
def list_products(
    db: Annotated[Session, Depends(get_db)],
    active: ActiveFilter | None = None,
) -> ApiResponse[list[ProductRead]]:
    """All products newest first, or only active ones by name with ?active=true."""
    rows = products.list_active(db) if active == "true" else products.list_all(db)
    return ApiResponse(data=rows)


@router.get("/{product_id}", response_model=ApiResponse[ProductRead])
def get_product(
    product_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ProductRead]:
    require_uuid(product_id, "product")
    product = products.get_by_id(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return ApiResponse(data=product)


@router.post("", response_model=ApiResponse[ProductRead], status_code=status.HTTP_201_CREATED)
async def create_product(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> ApiResponse[ProductRead]:
    body = await read_json_body(request, ProductCreate)
    return ApiResponse(data=await run_in_threadpool(products.create, db, body))


@router.put("/{product_id}", response_model=ApiResponse[ProductRead])
async def update_product(
    product_id: str,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> ApiResponse[ProductRead]:
    """Partial update: only fields present in the body change."""
    require_uuid(product_id, "product")
    body = await read_json_body(request, ProductUpdate)
    return ApiResponse(data=await run_in_threadpool(products.update, db, product_id, body))


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> MessageResponse:
    require_uuid(product_id, "product")
    if not products.delete(db, product_id):
        raise NotFoundError("Product not found")
    return MessageResponse(message="Product deleted")
