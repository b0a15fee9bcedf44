"""Core plumbing: settings, database sessions and the application error taxonomy."""

from storefront.core.config import get_settings, settings
from storefront.core.database import SessionLocal, get_db
from storefront.core.exceptions import AppError, register_exception_handlers

__all__ = ["AppError", "SessionLocal", "get_db", "get_settings", "register_exception_handlers", "settings"]
