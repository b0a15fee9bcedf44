"""Tests for the create_user command-line script."""

from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest.mock import patch

from helpers import DatabaseTestCase

from storefront.scripts import create_user
from storefront.services import users


class TestCreateUserScript(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        factory = patch.object(create_user, "SessionLocal", self.Session)
        factory.start()
        self.addCleanup(factory.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = StringIO(), StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin_by_default(self) -> None:
        code, out, _ = self._run("owner@shop.mx", "pw-owner", "--name", "Owner")
        self.assertEqual(code, 0)
        self.assertIn("owner@shop.mx", out)
        user = users.get_by_email(self.db, "owner@shop.mx")
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.name, "Owner")

    def test_duplicate_email_fails(self) -> None:
        self._run("owner@shop.mx", "pw-owner")
        code, _, err = self._run("owner@shop.mx", "pw-other", "editor")
        self.assertEqual(code, 1)
        self.assertIn("already in use", err)

    def test_invalid_email_fails(self) -> None:
        code, _, err = self._run("not-an-email", "pw")
        self.assertEqual(code, 1)
        self.assertIn("email", err)
