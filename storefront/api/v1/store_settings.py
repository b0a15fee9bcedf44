"""Store settings: a public read and an admin-only partial update."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin
from storefront.api.v1.payloads import read_json_body
from storefront.core.database import get_db
from storefront.schemas.common import ApiResponse
from storefront.schemas.store_settings import SettingsRead, SettingsUpdate
from storefront.schemas.users import UserRead
from storefront.services import store_settings

router = APIRouter()


@router.get("", response_model=ApiResponse[SettingsRead])
def get_settings(db: Annotated[Session, Depends(get_db)]) -> ApiResponse[SettingsRead]:
    """Current settings; the defaults are stored on first read."""
    return ApiResponse(data=store_settings.get(db))


@router.put("", response_model=ApiResponse[SettingsRead])
async def update_settings(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> ApiResponse[SettingsRead]:
    body = await read_json_body(request, SettingsUpdate)
    return ApiResponse(data=await run_in_threadpool(store_settings.update, db, body))
