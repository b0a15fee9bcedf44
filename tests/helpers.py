"""Shared test fixtures: in-memory SQLite database, API client and user factories."""

import os

# Same defaults as conftest.py, for runs under plain unittest.
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core import security
from storefront.core.database import get_db
from storefront.main import app
from storefront.models import Base, User
from storefront.models.base import new_uuid, utcnow
from storefront.schemas.users import UserCreate, UserRead
from storefront.services import users
from storefront.services.rate_limit import (
    InMemoryRateLimitStore,
    LoginRateLimiter,
    get_login_rate_limiter,
)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"

# Smallest valid PNG signature plus a few bytes of payload.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(64))


def make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test; bcrypt cost lowered so hashing stays fast."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.addCleanup(self.engine.dispose)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.db: Session = self.Session()
        self.addCleanup(self.db.close)
        rounds = patch.object(security, "BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def make_user(
        self,
        email: str = ADMIN_EMAIL,
        password: str = ADMIN_PASSWORD,
        role: str = "admin",
        is_active: int = 1,
    ) -> UserRead:
        return users.create(
            self.db,
            UserCreate(email=email, password=password, role=role, is_active=is_active),
        )

    def make_legacy_user(self, email: str, plain_password: str | None, role: str = "admin") -> str:
        """Insert a user whose stored password is plain text (pre-bcrypt data)."""
        now = utcnow()
        user_id = new_uuid()
        self.db.add(
            User(
                id=user_id,
                email=email,
                password=plain_password,
                role=role,
                is_active=1,
                created_at=now,
                updated_at=now,
            )
        )
        self.db.commit()
        return user_id


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient wired to the same database and a fresh limiter."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        self.limiter = LoginRateLimiter(InMemoryRateLimitStore(window_seconds=900), max_attempts=5)
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_login_rate_limiter] = lambda: self.limiter
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def login(self, email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD, **kwargs):
        return self.client.post("/api/auth/login", json={"email": email, "password": password}, **kwargs)

    def login_admin(self) -> UserRead:
        """Create the default admin and sign the client in as them."""
        admin = self.make_user()
        response = self.login()
        self.assertEqual(response.status_code, 200, response.text)
        return admin
