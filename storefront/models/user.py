"""ORM model for admin-panel users."""

from sqlalchemy import Column, DateTime, Integer, String

from storefront.models.base import Base, new_uuid, utcnow


class User(Base):
    """
    Admin-panel account.

    role: 'admin' or 'editor'. Only active admins may sign in.
    password holds a bcrypt hash; rows migrated from the old store may still
    hold plain text (or NULL) until the next successful login.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password = Column(String(255), nullable=True)
    role = Column(String(16), nullable=False, default="admin")
    is_active = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
