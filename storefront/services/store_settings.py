"""Store settings data access. There is exactly one row (id = 1), created on first read."""

import logging

from sqlalchemy.orm import Session

from storefront.core.database import dialect_insert
from storefront.core.exceptions import UpstreamError
from storefront.models import SETTINGS_ROW_ID, StoreSettings
from storefront.models.base import utcnow
from storefront.schemas.store_settings import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_CURRENCY,
    DEFAULT_STORE_NAME,
    SettingsRead,
    SettingsUpdate,
)

logger = logging.getLogger(__name__)


def _ensure_row(db: Session) -> StoreSettings:
    """Return the settings row, inserting the defaults first if it is missing."""
    row = db.get(StoreSettings, SETTINGS_ROW_ID)
    if row is not None:
        return row

    insert = dialect_insert(db)
    now = utcnow()
    stmt = insert(StoreSettings).values(
        id=SETTINGS_ROW_ID,
        store_name=DEFAULT_STORE_NAME,
        default_whatsapp=None,
        currency=DEFAULT_CURRENCY,
        accent_color=DEFAULT_ACCENT_COLOR,
        created_at=now,
        updated_at=now,
    )
    # Two first readers racing: the loser's insert is a no-op.
    db.execute(stmt.on_conflict_do_nothing(index_elements=[StoreSettings.id]))
    db.commit()
    logger.info("Initialized store settings with defaults")

    row = db.get(StoreSettings, SETTINGS_ROW_ID)
    if row is None:
        raise UpstreamError("Settings row missing after initialization")
    return row


def get(db: Session) -> SettingsRead:
    return SettingsRead.model_validate(_ensure_row(db))


def update(db: Session, data: SettingsUpdate) -> SettingsRead:
    """Apply only the fields present in data."""
    row = _ensure_row(db)
    changes = data.changes()
    if not changes:
        return SettingsRead.model_validate(row)
    for field, value in changes.items():
        setattr(row, field, value)
    row.updated_at = utcnow()
    db.commit()
    db.refresh(row)
    logger.info("Updated store settings fields=%s", sorted(changes))
    return SettingsRead.model_validate(row)
