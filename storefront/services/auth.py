"""
Credential checks and session resolution for the admin surface.

Login: unknown email or wrong password is a 401; a correct password on an
inactive or non-admin account is a 403. Session resolution runs on every
privileged request: the cookie only points at a user, the database decides.
"""

import logging

import jwt
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from storefront.core.security import (
    decode_session_token,
    hash_password,
    is_bcrypt_hash,
    is_valid_uuid,
    verify_password,
)
from storefront.schemas.auth import SessionUser
from storefront.schemas.users import ADMIN_ROLE, UserRead
from storefront.services import users

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str) -> SessionUser:
    """Verify credentials for the admin surface and return the session identity."""
    creds = users.get_credentials_by_email(db, email)
    if creds is None or not verify_password(password, creds.password):
        logger.info("Login failed: bad credentials")
        raise InvalidCredentialsError()
    if creds.is_active != 1:
        logger.info("Login refused: inactive account id=%s", creds.id)
        raise PermissionDeniedError("Account is inactive")
    if creds.role != ADMIN_ROLE:
        logger.info("Login refused: role=%s id=%s", creds.role, creds.id)
        raise PermissionDeniedError("Admin access required")

    if settings.LEGACY_PASSWORD_REHASH and not is_bcrypt_hash(creds.password):
        users.set_password_hash(db, creds.id, hash_password(password))
        logger.info("Re-hashed legacy plain-text password for user id=%s", creds.id)

    logger.info("Login succeeded for user id=%s", creds.id)
    return SessionUser(id=creds.id, email=creds.email, role=creds.role)


def resolve_session(db: Session, token: str | None) -> UserRead:
    """
    Turn a session cookie value into the current admin user.

    Raises AuthenticationError (401) for a missing, malformed or stale session
    and PermissionDeniedError (403) when the user is no longer an active admin.
    Every failure except a missing cookie asks for the cookie to be cleared.
    """
    if not token:
        raise AuthenticationError()
    try:
        payload = decode_session_token(token)
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid session", clear_session=True)
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not is_valid_uuid(user_id):
        raise AuthenticationError("Invalid session", clear_session=True)

    user = users.get_by_id(db, user_id)
    if user is None:
        raise AuthenticationError("Invalid session", clear_session=True)
    if user.role != ADMIN_ROLE or user.is_active != 1:
        raise PermissionDeniedError("Admin access required", clear_session=True)
    return user
