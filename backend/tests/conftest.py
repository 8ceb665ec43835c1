import os
import tempfile

import bcrypt
import pytest

# Must be set before anything imports storefront.config.
TEST_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
ADMIN_PASSWORD = "correct-horse-battery"
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(TEST_DIR, "test.db")
os.environ["ADMIN_PASSWORD_HASH"] = bcrypt.hashpw(
    ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)
).decode("ascii")
os.environ["SESSION_COOKIE_SECURE"] = "false"  # TestClient talks plain http
os.environ["SITE_BASE_URL"] = "https://shop.test"

from fastapi.testclient import TestClient  # noqa: E402

from storefront.db import SessionLocal, init_db  # noqa: E402
from storefront.main import app  # noqa: E402
from storefront.models.product import Product  # noqa: E402
from storefront.services.throttle_service import login_throttle  # noqa: E402

COOKIE = "admin-session"


@pytest.fixture(autouse=True)
def fresh_store():
    # every test starts from empty tables and an untouched login throttle
    init_db(reset=True)
    login_throttle.reset()
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_client():
    c = TestClient(app)
    res = c.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    return c


def seed_product(slug, created_at, **fields):
    """Insert a product directly, bypassing the service (lets tests pick created_at)."""
    db = SessionLocal()
    try:
        p = Product(
            slug=slug,
            name=fields.pop("name", slug.title()),
            price=fields.pop("price", 1.0),
            grams=fields.pop("grams", 0),
            category=fields.pop("category", ""),
            image=fields.pop("image", ""),
            short_desc=fields.pop("short_desc", ""),
            created_at=created_at,
        )
        db.add(p)
        db.commit()
        return p.id
    finally:
        db.close()
