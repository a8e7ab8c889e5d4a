# app/services/cart_service.py
import logging
import uuid

from app.core.exceptions import StoreError, UnavailableProductError
from app.database import Row
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CartItemRead, CartProduct, CartSummary
from app.services import pricing

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Contract:
      - mutations return True/False, never raise
      - reads return [] on any store error, never raise
      - user_id is resolved by the caller; None means unauthenticated
      - no local cache: every summary is rebuilt from a fresh read
    """

    def __init__(self, cart_repo: CartRepository):
        self.cart_repo = cart_repo

    # ---- internal helpers ----

    @staticmethod
    def _to_read(row: Row) -> CartItemRead | None:
        """
        Map a joined cart row. Returns None when the product join is empty
        or has no price; such a line cannot be priced.
        """
        product = row.get("marketplace_products")
        if not product or product.get("price") is None:
            return None
        farm = product.get("farms") or {}
        return CartItemRead(
            id=row["id"],
            product_id=row["product_id"],
            quantity=row["quantity"],
            product=CartProduct(
                id=product.get("id") or row["product_id"],
                name=product.get("name") or "",
                price=pricing.to_decimal(product["price"]),
                image=product.get("image") or "",
                unit=product.get("unit") or "Per kg",
                farm=farm.get("name") or "Unknown Farm",
            ),
        )

    def _read_lines(self, user_id: uuid.UUID) -> tuple[list[CartItemRead], list]:
        items, unavailable = [], []
        for row in self.cart_repo.list_for_user(user_id):
            item = self._to_read(row)
            if item is None:
                unavailable.append(row["product_id"])
            else:
                items.append(item)
        return items, unavailable

    def load_cart_items(self, user_id: uuid.UUID) -> list[CartItemRead]:
        """
        Raising variant of get_cart_items, used by checkout where a failed
        read must not be mistaken for an empty cart.

        Raises:
            StoreError: the cart could not be read.
            UnavailableProductError: a line has no readable product.
        """
        items, unavailable = self._read_lines(user_id)
        if unavailable:
            raise UnavailableProductError(unavailable)
        return items

    # ---- public operations ----

    def get_cart_items(self, user_id: uuid.UUID | None) -> list[CartItemRead]:
        if user_id is None:
            logger.info("get_cart_items: no user logged in")
            return []
        try:
            items, unavailable = self._read_lines(user_id)
        except StoreError as e:
            logger.error("get_cart_items failed for user %s: %s", user_id, e)
            return []
        if unavailable:
            logger.warning(
                "get_cart_items: skipped lines of user %s with unavailable products %s",
                user_id,
                unavailable,
            )
        return items

    def get_cart_summary(self, user_id: uuid.UUID | None) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead
          - total_items (sum of quantities)
          - price breakdown (subtotal, delivery fee, tax, grand total)
        """
        items = self.get_cart_items(user_id)
        return CartSummary(
            items=items,
            total_items=sum(it.quantity for it in items),
            totals=pricing.price_breakdown(items),
        )

    def add_to_cart(
        self,
        user_id: uuid.UUID | None,
        product_id: uuid.UUID,
        quantity: int = 1,
    ) -> bool:
        """
        Add a product to the user's cart.

        An existing line for the same product is incremented by `quantity`;
        otherwise a new line is inserted. quantity < 1 is rejected.
        """
        if user_id is None:
            logger.info("add_to_cart: no user logged in")
            return False
        if quantity < 1:
            logger.info("add_to_cart: rejected quantity %s for product %s", quantity, product_id)
            return False

        try:
            existing = self.cart_repo.get_item(user_id, product_id)
            if existing:
                self.cart_repo.set_quantity(
                    existing["id"], existing["quantity"] + quantity
                )
            else:
                self.cart_repo.create(user_id, product_id, quantity)
        except StoreError as e:
            logger.error(
                "add_to_cart failed for user %s, product %s: %s",
                user_id,
                product_id,
                e,
            )
            return False
        return True

    def update_quantity(
        self,
        cart_item_id: uuid.UUID | str,
        quantity: int,
        user_id: uuid.UUID | None = None,
    ) -> bool:
        """
        Set the quantity of a cart line (last write wins).
        quantity <= 0 removes the line instead.

        `user_id`, when given, restricts the write to that user's line.
        """
        if quantity <= 0:
            return self.remove_from_cart(cart_item_id, user_id=user_id)

        try:
            self.cart_repo.set_quantity(cart_item_id, quantity, user_id)
        except StoreError as e:
            logger.error("update_quantity failed for item %s: %s", cart_item_id, e)
            return False
        return True

    def remove_from_cart(
        self,
        cart_item_id: uuid.UUID | str,
        user_id: uuid.UUID | None = None,
    ) -> bool:
        """
        Delete a cart line. Deleting a line that does not exist is a success.
        """
        try:
            self.cart_repo.delete(cart_item_id, user_id)
        except StoreError as e:
            logger.error("remove_from_cart failed for item %s: %s", cart_item_id, e)
            return False
        return True

    def clear_cart(self, user_id: uuid.UUID | None) -> bool:
        """
        Delete every line of the user's cart.
        """
        if user_id is None:
            logger.info("clear_cart: no user logged in")
            return False

        try:
            self.cart_repo.clear_user_cart(user_id)
        except StoreError as e:
            logger.error("clear_cart failed for user %s: %s", user_id, e)
            return False
        return True
