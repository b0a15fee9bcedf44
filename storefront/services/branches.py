"""Branch data access."""

import logging

from sqlalchemy.orm import Session

from storefront.core.exceptions import NotFoundError
from storefront.models import Branch
from storefront.models.base import new_uuid, utcnow
from storefront.schemas.branches import BranchCreate, BranchRead, BranchUpdate

logger = logging.getLogger(__name__)


def list_all(db: Session) -> list[BranchRead]:
    """All branches, newest first (admin view)."""
    rows = db.query(Branch).order_by(Branch.created_at.desc()).all()
    return [BranchRead.model_validate(row) for row in rows]


def list_active(db: Session) -> list[BranchRead]:
    """Active branches by name (customer view)."""
    rows = db.query(Branch).filter(Branch.is_active == 1).order_by(Branch.name.asc()).all()
    return [BranchRead.model_validate(row) for row in rows]


def get_by_id(db: Session, branch_id: str) -> BranchRead | None:
    row = db.get(Branch, branch_id)
    return BranchRead.model_validate(row) if row is not None else None


def create(db: Session, data: BranchCreate) -> BranchRead:
    now = utcnow()
    row = Branch(id=new_uuid(), created_at=now, updated_at=now, **data.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created branch id=%s", row.id)
    return BranchRead.model_validate(row)


def update(db: Session, branch_id: str, data: BranchUpdate) -> BranchRead:
    row = db.get(Branch, branch_id)
    if row is None:
        raise NotFoundError("Branch not found")
    changes = data.changes()
    if not changes:
        return BranchRead.model_validate(row)
    for field, value in changes.items():
        setattr(row, field, value)
    row.updated_at = utcnow()
    db.commit()
    db.refresh(row)
    logger.info("Updated branch id=%s fields=%s", branch_id, sorted(changes))
    return BranchRead.model_validate(row)


def delete(db: Session, branch_id: str) -> bool:
    deleted = db.query(Branch).filter(Branch.id == branch_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info("Deleted branch id=%s", branch_id)
    return deleted > 0
