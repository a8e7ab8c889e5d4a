"""
Unit Tests: CartService

- get_cart_items() - joined read with display defaults, soft failure,
  lines without a product skipped
- add_to_cart() - merge into existing line, reject quantity < 1
- update_quantity() / remove_from_cart() / clear_cart()
"""
import uuid
from decimal import Decimal

import pytest


class TestGetCartItems:
    def test_enriches_lines_with_product(self, filled_cart, catalog):
        # newest first: eggs were added last
        eggs, tomatoes = filled_cart

        assert tomatoes.product.name == "Tomatoes"
        assert tomatoes.product.farm == "Green Acres"
        assert tomatoes.product.unit == "Per lb"
        assert tomatoes.unit_price == Decimal("3.00")
        assert tomatoes.quantity == 2

        assert eggs.product.farm == "Unknown Farm"
        assert eggs.product.unit == "Per kg"
        assert eggs.product.image == ""

    def test_price_is_read_live(self, store, filled_cart, catalog, user_id, cart_service):
        catalog["tomatoes"]["price"] = 3.25

        items = {it.product.name: it for it in cart_service.get_cart_items(user_id)}
        assert items["Tomatoes"].unit_price == Decimal("3.25")

    def test_store_error_returns_empty(self, store, filled_cart, user_id, cart_service):
        store.fail_on.add(("select", "cart_items"))
        assert cart_service.get_cart_items(user_id) == []

    def test_no_user_returns_empty(self, filled_cart, cart_service):
        assert cart_service.get_cart_items(None) == []

    def test_only_own_lines(self, filled_cart, cart_service):
        assert cart_service.get_cart_items(uuid.uuid4()) == []

    def test_skips_line_without_product(self, store, filled_cart, user_id, cart_service):
        """A line whose product was deleted or hidden is left out of the read."""
        store.seed("cart_items", user_id=str(user_id), product_id=str(uuid.uuid4()), quantity=4)

        items = cart_service.get_cart_items(user_id)
        assert [it.product.name for it in items] == ["Eggs", "Tomatoes"]
        assert cart_service.get_cart_summary(user_id).total_items == 3

    def test_sub_cent_price_kept_on_line(self, store, user_id, cart_service):
        """Unit prices are not rounded; only the subtotal is."""
        seeds = store.seed("marketplace_products", name="Seeds", price=0.125, in_stock=True)
        cart_service.add_to_cart(user_id, seeds["id"], 8)

        [line] = cart_service.get_cart_items(user_id)
        assert line.unit_price == Decimal("0.125")
        assert cart_service.get_cart_summary(user_id).totals.subtotal == Decimal("1.00")


class TestAddToCart:
    def test_inserts_new_line(self, store, catalog, user_id, cart_service):
        assert cart_service.add_to_cart(user_id, catalog["tomatoes"]["id"]) is True

        rows = store.rows("cart_items")
        assert len(rows) == 1
        assert rows[0]["quantity"] == 1
        assert rows[0]["user_id"] == str(user_id)

    @pytest.mark.parametrize("q1,q2", [(1, 1), (2, 3), (10, 1)])
    def test_merges_instead_of_duplicating(self, store, catalog, user_id, cart_service, q1, q2):
        product_id = catalog["eggs"]["id"]

        assert cart_service.add_to_cart(user_id, product_id, q1)
        assert cart_service.add_to_cart(user_id, product_id, q2)

        rows = [r for r in store.rows("cart_items") if r["product_id"] == str(product_id)]
        assert len(rows) == 1
        assert rows[0]["quantity"] == q1 + q2

    def test_unauthenticated_returns_false(self, store, catalog, cart_service):
        assert cart_service.add_to_cart(None, catalog["eggs"]["id"]) is False
        assert store.writes == []

    def test_store_error_returns_false(self, store, catalog, user_id, cart_service):
        store.fail_on.add(("insert", "cart_items"))
        assert cart_service.add_to_cart(user_id, catalog["eggs"]["id"]) is False

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_rejected(self, store, catalog, user_id, cart_service, quantity):
        assert cart_service.add_to_cart(user_id, catalog["eggs"]["id"], quantity) is False
        assert store.writes == []

    def test_non_positive_does_not_shrink_existing_line(
        self, store, catalog, user_id, cart_service
    ):
        product_id = catalog["eggs"]["id"]
        assert cart_service.add_to_cart(user_id, product_id, 2)

        assert cart_service.add_to_cart(user_id, product_id, -5) is False
        [row] = store.rows("cart_items")
        assert row["quantity"] == 2


class TestUpdateQuantity:
    def test_sets_quantity(self, store, filled_cart, cart_service):
        line = filled_cart[0]

        assert cart_service.update_quantity(line.id, 7) is True
        row = next(r for r in store.rows("cart_items") if r["id"] == str(line.id))
        assert row["quantity"] == 7

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_removes_line(self, store, filled_cart, cart_service, quantity):
        line = filled_cart[0]

        assert cart_service.update_quantity(line.id, quantity) is True
        assert all(r["id"] != str(line.id) for r in store.rows("cart_items"))
        assert ("update", "cart_items") not in store.writes

    def test_scoped_to_owner(self, store, filled_cart, cart_service):
        line = filled_cart[0]

        cart_service.update_quantity(line.id, 9, user_id=uuid.uuid4())
        row = next(r for r in store.rows("cart_items") if r["id"] == str(line.id))
        assert row["quantity"] == line.quantity

    def test_store_error_returns_false(self, store, filled_cart, cart_service):
        store.fail_on.add(("update", "cart_items"))
        assert cart_service.update_quantity(filled_cart[0].id, 4) is False


class TestRemoveFromCart:
    def test_removes_line(self, store, filled_cart, cart_service):
        assert cart_service.remove_from_cart(filled_cart[0].id) is True
        assert len(store.rows("cart_items")) == 1

    @pytest.mark.parametrize("missing_id", [uuid.uuid4(), str(uuid.uuid4())])
    def test_missing_line_is_success(self, filled_cart, cart_service, missing_id):
        assert cart_service.remove_from_cart(missing_id) is True

    def test_store_error_returns_false(self, store, filled_cart, cart_service):
        store.fail_on.add(("delete", "cart_items"))
        assert cart_service.remove_from_cart(filled_cart[0].id) is False


class TestClearCart:
    def test_clears_only_this_user(self, store, catalog, filled_cart, user_id, cart_service):
        other = uuid.uuid4()
        cart_service.add_to_cart(other, catalog["eggs"]["id"])

        assert cart_service.clear_cart(user_id) is True
        assert cart_service.get_cart_items(user_id) == []
        assert len(cart_service.get_cart_items(other)) == 1

    def test_unauthenticated_returns_false(self, cart_service):
        assert cart_service.clear_cart(None) is False


class TestCartSummary:
    def test_totals(self, filled_cart, user_id, cart_service):
        summary = cart_service.get_cart_summary(user_id)

        assert summary.total_items == 3
        assert summary.totals.subtotal == Decimal("10.50")
        assert summary.totals.grand_total == Decimal("16.34")

    def test_refetched_after_mutation(self, filled_cart, user_id, cart_service):
        cart_service.update_quantity(filled_cart[1].id, 4)  # tomatoes -> 4

        summary = cart_service.get_cart_summary(user_id)
        assert summary.total_items == 5
        assert summary.totals.subtotal == Decimal("16.50")
