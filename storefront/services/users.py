"""User data access. Passwords are hashed here and only leave through get_credentials_by_email."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.exceptions import ConflictError, NotFoundError
from storefront.core.security import hash_password
from storefront.models import User
from storefront.models.base import new_uuid, utcnow
from storefront.schemas.users import UserCreate, UserCredentials, UserRead, UserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email is already in use"


def list_all(db: Session) -> list[UserRead]:
    """All users, newest first."""
    rows = db.query(User).order_by(User.created_at.desc()).all()
    return [UserRead.model_validate(row) for row in rows]


def list_active(db: Session) -> list[UserRead]:
    """Active users ordered by email."""
    rows = db.query(User).filter(User.is_active == 1).order_by(User.email.asc()).all()
    return [UserRead.model_validate(row) for row in rows]


def get_by_id(db: Session, user_id: str) -> UserRead | None:
    row = db.get(User, user_id)
    return UserRead.model_validate(row) if row is not None else None


def get_by_email(db: Session, email: str) -> UserRead | None:
    row = db.query(User).filter(User.email == email).first()
    return UserRead.model_validate(row) if row is not None else None


def get_credentials_by_email(db: Session, email: str) -> UserCredentials | None:
    """Lookup for login only: includes the stored password (hash or legacy plain text)."""
    row = db.query(User).filter(User.email == email).first()
    return UserCredentials.model_validate(row) if row is not None else None


def create(db: Session, data: UserCreate) -> UserRead:
    now = utcnow()
    row = User(
        id=new_uuid(),
        email=data.email,
        name=data.name,
        password=hash_password(data.password),
        role=data.role,
        is_active=data.is_active,
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e
    db.refresh(row)
    logger.info("Created user id=%s role=%s", row.id, row.role)
    return UserRead.model_validate(row)


def update(db: Session, user_id: str, data: UserUpdate) -> UserRead:
    """Apply only the fields present in data. A new password is re-hashed."""
    row = db.get(User, user_id)
    if row is None:
        raise NotFoundError("User not found")
    changes = data.changes()
    if not changes:
        return UserRead.model_validate(row)
    if "password" in changes:
        changes["password"] = hash_password(changes["password"])
    for field, value in changes.items():
        setattr(row, field, value)
    row.updated_at = utcnow()
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e
    db.refresh(row)
    logger.info("Updated user id=%s fields=%s", user_id, sorted(changes))
    return UserRead.model_validate(row)


def set_password_hash(db: Session, user_id: str, password_hash: str) -> None:
    """Replace the stored password with an already-computed hash (legacy migration)."""
    db.query(User).filter(User.id == user_id).update(
        {User.password: password_hash, User.updated_at: utcnow()},
        synchronize_session=False,
    )
    db.commit()


def delete(db: Session, user_id: str) -> bool:
    """Hard delete. True iff a row was removed."""
    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info("Deleted user id=%s", user_id)
    return deleted > 0
