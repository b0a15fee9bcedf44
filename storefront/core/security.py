"""Input predicates, password hashing and session-token signing."""

import hmac
import re
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from storefront.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

EMAIL_MAX_LEN = 255
PASSWORD_MAX_LEN = 128
DEFAULT_MAX_PAYLOAD_BYTES = 10 * 1024
SANITIZED_MAX_LEN = 1000

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_PHONE_RE = re.compile(r"^[\d\s+\-()]{10,20}$")

# Heuristic only: every query already uses bound parameters. Matches ordinary
# prose such as "select your size", so callers reject with a 400 and move on.
_SQL_INJECTION_PATTERNS = (
    re.compile(
        r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|UNION|SCRIPT)\b",
        re.IGNORECASE,
    ),
    re.compile(r"(--|#|/\*|\*/|;|xp_|sp_)", re.IGNORECASE),
)


def is_valid_email(value: str) -> bool:
    """True for a single address of the form local@domain.tld, at most 255 chars."""
    if not isinstance(value, str):
        return False
    return bool(_EMAIL_RE.fullmatch(value)) and len(value) <= EMAIL_MAX_LEN


def is_valid_uuid(value: str) -> bool:
    """True for the canonical 8-4-4-4-12 hex form, any case."""
    if not isinstance(value, str):
        return False
    return bool(_UUID_RE.fullmatch(value))


def is_valid_hex_color(value: str) -> bool:
    """True only for #RRGGBB; the 3-digit short form is rejected."""
    if not isinstance(value, str):
        return False
    return bool(_HEX_COLOR_RE.fullmatch(value))


def is_valid_phone(value: str) -> bool:
    """True for 10-20 chars made of digits, spaces, '+', '-', '(' and ')'."""
    if not isinstance(value, str):
        return False
    return bool(_PHONE_RE.fullmatch(value))


def validate_payload_size(body: str | bytes, max_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES) -> bool:
    """True when the UTF-8 encoded body fits within max_bytes."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return len(body) <= max_bytes


def contains_sql_injection(value: str) -> bool:
    """True when value contains an SQL keyword or a comment/terminator token."""
    if not isinstance(value, str):
        return False
    return any(pattern.search(value) for pattern in _SQL_INJECTION_PATTERNS)


def sanitize_string(value: str) -> str:
    """Drop angle brackets, trim, and cap length for display-only text."""
    if not isinstance(value, str):
        return ""
    return value.replace("<", "").replace(">", "").strip()[:SANITIZED_MAX_LEN]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def is_bcrypt_hash(stored: str | None) -> bool:
    return bool(stored) and stored.startswith(BCRYPT_PREFIXES)


def verify_password(plain_password: str, stored: str | None) -> bool:
    """
    Verify a plain password against the stored value.

    Stored values with a bcrypt prefix are checked with bcrypt. Anything else is
    a legacy plain-text password and must match exactly.
    """
    if not stored:
        return False
    if is_bcrypt_hash(stored):
        pw_bytes = plain_password.encode("utf-8")[:72]
        try:
            return bcrypt.checkpw(pw_bytes, stored.encode("utf-8"))
        except (ValueError, TypeError):
            return False
    return hmac.compare_digest(plain_password.encode("utf-8"), stored.encode("utf-8"))


def create_session_token(user_id: str, email: str, role: str) -> str:
    """Sign the session payload (sub=user id, email, role) for the session cookie."""
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS),
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a session token; return its payload.
    Raises jwt.PyJWTError on a malformed, tampered or expired token.
    """
    return jwt.decode(
        token,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[settings.SESSION_ALGORITHM],
    )
