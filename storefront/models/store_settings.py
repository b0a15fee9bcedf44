"""ORM model for the singleton store settings row (id is always 1)."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String

from storefront.models.base import Base, utcnow

SETTINGS_ROW_ID = 1


class StoreSettings(Base):
    __tablename__ = "settings"
    __table_args__ = (CheckConstraint("id = 1", name="ck_settings_singleton"),)

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID, autoincrement=False)
    store_name = Column(String(255), nullable=False)
    default_whatsapp = Column(String(32), nullable=True)
    currency = Column(String(3), nullable=False)
    accent_color = Column(String(7), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
