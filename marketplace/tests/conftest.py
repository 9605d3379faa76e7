"""
Shared fixtures: every test gets its own empty data directory, plus
helpers to seed documents and to act as a given user.
"""

import uuid

import pytest

from marketplace.authentication.schemas import TokenData, UserRole
from marketplace.authentication.security import get_current_user
from marketplace.cart import utils as cart_utils
from marketplace.main import app
from marketplace.moderation import utils as log_utils
from marketplace.reports import utils as report_utils
from marketplace.reviews import schemas as review_schemas, utils as review_utils
from marketplace.shops import schemas as shop_schemas, utils as shop_utils
from marketplace.users import schemas as user_schemas, utils as user_utils


@pytest.fixture(autouse=True)
def isolated_store(tmp_path, monkeypatch):
    """Point every collection at a temporary directory."""
    monkeypatch.setattr(user_utils, "USERS_FILE", str(tmp_path / "users.json"))
    monkeypatch.setattr(shop_utils, "SHOPS_FILE", str(tmp_path / "shops.json"))
    monkeypatch.setattr(shop_utils, "ITEMS_FILE", str(tmp_path / "items.json"))
    monkeypatch.setattr(review_utils, "REVIEWS_FILE", str(tmp_path / "reviews.json"))
    monkeypatch.setattr(report_utils, "REPORTS_FILE", str(tmp_path / "reports.json"))
    monkeypatch.setattr(log_utils, "LOGS_FILE", str(tmp_path / "moderation_logs.json"))
    monkeypatch.setattr(cart_utils, "CARTS_FILE", str(tmp_path / "carts.json"))
    yield tmp_path


@pytest.fixture
def auth_user():
    """
    Override get_current_user at the app level.
    Usage: auth_user(some_user) or auth_user(role="admin")
    """
    def _set_user(user=None, *, role="shopper", user_id="mock_user_id"):
        if user is not None:
            fake = TokenData(user_id=user.id, role=user.role, name=user.name)
        else:
            fake = TokenData(user_id=user_id, role=role)
        app.dependency_overrides[get_current_user] = lambda: fake
        return fake

    yield _set_user
    app.dependency_overrides.clear()


# ────────────────────────────────
# Seed helpers
# ────────────────────────────────
@pytest.fixture
def make_user():
    def _make(role=UserRole.SHOPPER, name="Test User"):
        email = f"{uuid.uuid4().hex[:8]}@example.com"
        return user_utils.add_user(user_schemas.UserCreate(name=name, email=email, role=role))
    return _make


@pytest.fixture
def make_shop():
    def _make(owner, name="Corner Provisions", location=None):
        data = shop_schemas.ShopCreate(name=name, address="1 Main St", location=location)
        return shop_utils.create_shop(owner.id, data)
    return _make


@pytest.fixture
def make_item():
    def _make(shop, name="Jasmine Rice 5kg"):
        return shop_utils.add_item(shop.id, shop_schemas.ItemCreate(name=name, price=12.5))
    return _make


@pytest.fixture
def make_review():
    def _make(shopper, item, description="Still in stock on Saturday"):
        data = review_schemas.ReviewCreate(item_id=item.id, description=description, availability=True)
        return review_utils.add_review(data, shopper.id)
    return _make


@pytest.fixture
def world(make_user, make_shop, make_item, make_review):
    """A small world: one owner's shop with an item, reviewed by a shopper."""
    admin = make_user(UserRole.ADMIN, name="Ada Admin")
    owner = make_user(UserRole.OWNER, name="Olu Owner")
    shopper = make_user(UserRole.SHOPPER, name="Sam Shopper")
    reporter = make_user(UserRole.SHOPPER, name="Rae Reporter")
    shop = make_shop(owner)
    item = make_item(shop)
    review = make_review(shopper, item)
    return {
        "admin": admin, "owner": owner, "shopper": shopper, "reporter": reporter,
        "shop": shop, "item": item, "review": review,
    }
