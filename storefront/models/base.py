"""SQLAlchemy declarative Base and shared model configuration."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_uuid() -> str:
    """Primary keys are canonical UUID strings so they survive SQLite and PostgreSQL alike."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)
