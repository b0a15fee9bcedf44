"""ORM model for physical store branches."""

from sqlalchemy import Column, DateTime, Integer, String

from storefront.models.base import Base, new_uuid, utcnow


class Branch(Base):
    __tablename__ = "branches"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(255), nullable=False, index=True)
    address = Column(String(1024), nullable=True)
    phone = Column(String(32), nullable=True)
    is_active = Column(Integer, nullable=False, default=1, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
