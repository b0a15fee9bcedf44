"""
Alembic environment for the storefront schema.

The database URL comes from storefront settings (DATABASE_URL or .env), so the
CLI migrates the same database the app serves. `alembic -x url=...` points a
single run somewhere else, e.g. a scratch SQLite file. Autogenerate compares
against storefront.models.Base.metadata.
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from storefront.core.config import settings

# Importing the package registers users, branches, products, product_image and settings.
from storefront.models import Base

config = context.config
# Load logging from alembic.ini only if it defines [formatters], [handlers], [loggers].
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata

# SQLite's own bookkeeping tables (sqlite_sequence, sqlite_stat1).
SQLITE_INTERNAL_PREFIX = "sqlite_"


def get_url() -> str:
    """The -x url= override if given, else the application's DATABASE_URL."""
    return context.get_x_argument(as_dictionary=True).get("url", settings.DATABASE_URL)


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    """Keep autogenerate from proposing drops of tables the storefront does not own."""
    if type_ == "table" and reflected and compare_to is None:
        return not name.startswith(SQLITE_INTERNAL_PREFIX)
    return True


def configure_options(dialect_name: str) -> dict:
    """context.configure() options shared by offline and online runs."""
    return {
        "target_metadata": target_metadata,
        "include_object": include_object,
        # Integer money columns and String widths must show up as diffs.
        "compare_type": True,
        # SQLite cannot ALTER the products check constraints in place.
        "render_as_batch": dialect_name == "sqlite",
    }


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(make_url(url).get_backend_name()),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(get_url(), poolclass=NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, **configure_options(connection.dialect.name))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
