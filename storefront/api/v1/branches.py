"""Branch (physical store) endpoints. Reads are public; writes require an admin session."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin
from storefront.api.v1.payloads import read_json_body, require_uuid
from storefront.core.database import get_db
from storefront.core.exceptions import NotFoundError
from storefront.schemas.branches import BranchCreate, BranchRead, BranchUpdate
from storefront.schemas.common import ActiveFilter, ApiResponse, MessageResponse
from storefront.schemas.users import UserRead
from storefront.services import branches

router = APIRouter()


@router.get("", response_model=ApiResponse[list[BranchRead]])
def list_branches(
    db: Annotated[Session, Depends(get_db)],
    active: ActiveFilter | None = None,
) -> ApiResponse[list[BranchRead]]:
    rows = branches.list_active(db) if active == "true" else branches.list_all(db)
    return ApiResponse(data=rows)


@router.get("/{branch_id}", response_model=ApiResponse[BranchRead])
def get_branch(
    branch_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[BranchRead]:
    require_uuid(branch_id, "branch")
    branch = branches.get_by_id(db, branch_id)
    if branch is None:
        raise NotFoundError("Branch not found")
    return ApiResponse(data=branch)


@router.post("", response_model=ApiResponse[BranchRead], status_code=status.HTTP_201_CREATED)
async def create_branch(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> ApiResponse[BranchRead]:
    body = await read_json_body(request, BranchCreate)
    return ApiResponse(data=await run_in_threadpool(branches.create, db, body))


@router.put("/{branch_id}", response_model=ApiResponse[BranchRead])
async def update_branch(
    branch_id: str,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> ApiResponse[BranchRead]:
    require_uuid(branch_id, "branch")
    body = await read_json_body(request, BranchUpdate)
    return ApiResponse(data=await run_in_threadpool(branches.update, db, branch_id, body))


@router.delete("/{branch_id}", response_model=MessageResponse)
def delete_branch(
    branch_id: str,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[UserRead, Depends(require_admin)],
) -> MessageResponse:
    require_uuid(branch_id, "branch")
    if not branches.delete(db, branch_id):
        raise NotFoundError("Branch not found")
    return MessageResponse(message="Branch deleted")
