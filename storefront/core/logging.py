"""Process-wide logging setup (stdlib logging, one logger per module)."""

import logging

from storefront.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    logging.getLogger().setLevel(level or settings.LOG_LEVEL)
    # SQL echo is controlled by DEBUG through the engine, not by this level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
