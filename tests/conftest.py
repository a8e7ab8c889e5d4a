"""
Pytest configuration and fixtures for tests.

Environment variables are set before any app module reads settings.
"""
import os
import uuid

import pytest

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

from app.repositories.cart_repo import CartRepository  # noqa: E402
from app.repositories.favorite_repo import FavoriteRepository  # noqa: E402
from app.repositories.order_repo import OrderRepository  # noqa: E402
from app.repositories.product_repo import ProductRepository  # noqa: E402
from app.repositories.profile_repo import ProfileRepository  # noqa: E402
from app.services.cart_service import CartService  # noqa: E402
from app.services.favorite_service import FavoriteService  # noqa: E402
from app.services.order_service import OrderService  # noqa: E402
from app.services.product_service import ProductService  # noqa: E402
from tests.fakes import FakeStore  # noqa: E402


@pytest.fixture
def store():
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def catalog(store):
    """
    Two products:
      - Tomatoes 3.00, Per lb, from Green Acres
      - Eggs 4.50, no unit, no farm
    """
    farm = store.seed("farms", name="Green Acres", location="Springfield")
    category = store.seed("product_categories", name="Vegetables")
    tomatoes = store.seed(
        "marketplace_products",
        name="Tomatoes",
        price=3.00,
        unit="Per lb",
        image="tomatoes.png",
        in_stock=True,
        farm_id=farm["id"],
        category_id=category["id"],
    )
    eggs = store.seed(
        "marketplace_products",
        name="Eggs",
        price=4.50,
        unit=None,
        image=None,
        in_stock=True,
        farm_id=None,
        category_id=None,
    )
    return {"tomatoes": tomatoes, "eggs": eggs, "farm": farm, "category": category}


@pytest.fixture
def cart_service(store):
    return CartService(CartRepository(store))


@pytest.fixture
def product_service(store):
    return ProductService(ProductRepository(store))


@pytest.fixture
def favorite_service(store):
    return FavoriteService(FavoriteRepository(store))


@pytest.fixture
def make_order_service(store, cart_service):
    def _make(**kwargs):
        return OrderService(
            OrderRepository(store),
            ProfileRepository(store, "profiles"),
            cart_service,
            **kwargs,
        )

    return _make


@pytest.fixture
def order_service(make_order_service):
    return make_order_service()


@pytest.fixture
def filled_cart(store, catalog, user_id, cart_service):
    """Cart = 2 x Tomatoes + 1 x Eggs."""
    assert cart_service.add_to_cart(user_id, catalog["tomatoes"]["id"], 2)
    assert cart_service.add_to_cart(user_id, catalog["eggs"]["id"], 1)
    store.writes.clear()
    return cart_service.get_cart_items(user_id)
