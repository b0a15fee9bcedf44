"""Run the alembic revisions against scratch SQLite databases."""

import argparse
import io
import tempfile
import unittest
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from storefront.models import Base

SCRIPT_LOCATION = Path(__file__).resolve().parents[1] / "alembic"


def _alembic_config(url: str, output: io.StringIO | None = None) -> Config:
    cfg = Config(output_buffer=output, cmd_opts=argparse.Namespace(x=[f"url={url}"]))
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    return cfg


class TestMigrations(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.url = f"sqlite:///{Path(tmp.name) / 'migrate.db'}"

    def _tables(self) -> set[str]:
        engine = create_engine(self.url)
        try:
            return set(inspect(engine).get_table_names())
        finally:
            engine.dispose()

    def test_upgrade_creates_every_model_table_and_downgrade_removes_them(self) -> None:
        cfg = _alembic_config(self.url)
        command.upgrade(cfg, "head")
        self.assertEqual(self._tables(), set(Base.metadata.tables) | {"alembic_version"})

        command.downgrade(cfg, "base")
        self.assertEqual(self._tables(), {"alembic_version"})

    def test_offline_mode_emits_sql_with_money_checks(self) -> None:
        output = io.StringIO()
        command.upgrade(_alembic_config(self.url, output), "head", sql=True)
        sql = output.getvalue()
        self.assertIn("CREATE TABLE products", sql)
        self.assertIn("price_cents >= 0", sql)
        # Nothing touched the database file.
        self.assertEqual(self._tables(), set())
