"""Pytest configuration: an in-memory stand-in for PostgresCRUD and a test client."""

import pytest
from fastapi.testclient import TestClient

from core.config import Settings, get_settings
from core.database import get_db
from core.security import TokenService
from main import app


TEST_SETTINGS = Settings(
    POSTGRES_URI="postgresql+psycopg2://test@localhost:5432/test",
    JWT_SECRET="test-secret",
    JWT_ALGORITHM="HS256",
    ACCESS_TOKEN_TTL_MINUTES=60,
    DEFAULT_PAGE_LIMIT="24",
)


class FakeDB:
    """
    Records every statement and answers reads through ``handler``.

    ``handler(query, params)`` returns a list of row dicts; it may raise to
    simulate a store failure.
    """

    def __init__(self):
        self.calls = []
        self.handler = lambda query, params: []

    def fetch_records(self, query, params=None):
        self.calls.append(("fetch", query, dict(params or {})))
        return self.handler(query, params or {})

    def fetch_one(self, query, params=None):
        records = self.fetch_records(query, params)
        return records[0] if records else None

    def execute_query(self, query, params=None, return_data=False):
        self.calls.append(("execute", query, dict(params or {})))
        return 1

    def execute_returning(self, query, params=None):
        self.calls.append(("write", query, dict(params or {})))
        return self.handler(query, params or {})

    def statements(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def fake_db():
    return FakeDB()


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    return TokenService.from_settings(TEST_SETTINGS)


@pytest.fixture
def auth_headers(token_service):
    token = token_service.issue({"id": 7, "nickname": "olena", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}


def make_product_row(product_id, category_id="face", volume="50 ml", **overrides):
    """A raw joined row as the product data query returns it."""
    row = {
        "id": product_id,
        "name": f"Product {product_id}",
        "volume": volume,
        "type": "cream",
        "rating": 4.5,
        "views": 10,
        "code": f"C-{product_id}",
        "category_name": "Обличчя",
        "category_id": category_id,
        "brand_name": "Nivea",
        "description": "Moisturising cream",
        "composition": "Aqua",
        "usage": "Apply daily",
        "description_full": "Long description",
        "feature_brand": "Nivea",
        "country": "Germany",
        "feature_type": "day cream",
        "class": "mass market",
        "feature_category": "face care",
        "purpose": "hydration",
        "gender": "female",
        "active_ingredients": "hyaluronic acid",
        "images": [f"https://cdn.example.com/{product_id}.jpg"],
        "store_prices": [{"store_id": 1, "name": "Eva", "price": 199.0, "link": "https://eva.ua/p"}],
    }
    row.update(overrides)
    return row
