"""Admin-panel user management. Every route requires an admin session."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin
from storefront.api.v1.payloads import read_json_body, require_uuid
from storefront.core.database import get_db
from storefront.core.exceptions import DataValidationError, NotFoundError
from storefront.core.security import is_valid_email
from storefront.schemas.common import ActiveFilter, ApiResponse, MessageResponse
from storefront.schemas.users import UserCreate, UserRead, UserUpdate
from storefront.services import users

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=ApiResponse[list[UserRead]])
def list_users(
    db: Annotated[Session, Depends(get_db)],
    active: ActiveFilter | None = None,
) -> ApiResponse[list[UserRead]]:
    rows = users.list_active(db) if active == "true" else users.list_all(db)
    return ApiResponse(data=rows)


@router.get("/email/{email}", response_model=ApiResponse[UserRead])
def get_user_by_email(
    email: str,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[UserRead]:
    if not is_valid_email(email):
        raise DataValidationError("Invalid email")
    user = users.get_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    return ApiResponse(data=user)


@router.get("/{user_id}", response_model=ApiResponse[UserRead])
def get_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[UserRead]:
    require_uuid(user_id, "user")
    user = users.get_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return ApiResponse(data=user)


@router.post("", response_model=ApiResponse[UserRead], status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[UserRead]:
    """Create a user; the password is stored as a bcrypt hash. Duplicate email is a 409."""
    body = await read_json_body(request, UserCreate)
    return ApiResponse(data=await run_in_threadpool(users.create, db, body))


@router.put("/{user_id}", response_model=ApiResponse[UserRead])
async def update_user(
    user_id: str,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[UserRead]:
    require_uuid(user_id, "user")
    body = await read_json_body(request, UserUpdate)
    return ApiResponse(data=await run_in_threadpool(users.update, db, user_id, body))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    require_uuid(user_id, "user")
    if not users.delete(db, user_id):
        raise NotFoundError("User not found")
    return MessageResponse(message="User deleted")
