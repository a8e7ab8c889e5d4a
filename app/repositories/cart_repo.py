# app/repositories/cart_repo.py
import uuid

from app.database import DataStore, Row

CART_TABLE = "cart_items"
PRODUCT_JOIN = "marketplace_products(id, name, price, image, unit, farms(name))"


class CartRepository:
    """
    Data access layer for cart_items.

    - Pure store operations, no business rules.
    - Every store failure surfaces as StoreError; the service decides
      whether to swallow it.
    """

    def __init__(self, store: DataStore):
        self.store = store

    # Get lines for a user, joined with product + farm name
    def list_for_user(self, user_id: uuid.UUID) -> list[Row]:
        return self.store.select(
            CART_TABLE,
            filters={"user_id": user_id},
            joins=(PRODUCT_JOIN,),
            order_by="created_at",
            descending=True,
        )

    def get_item(self, user_id: uuid.UUID, product_id: uuid.UUID) -> Row | None:
        rows = self.store.select(
            CART_TABLE,
            filters={"user_id": user_id, "product_id": product_id},
        )
        return rows[0] if rows else None

    # CRUD
    def create(self, user_id: uuid.UUID, product_id: uuid.UUID, quantity: int) -> Row:
        rows = self.store.insert(
            CART_TABLE,
            {
                "user_id": str(user_id),
                "product_id": str(product_id),
                "quantity": quantity,
            },
        )
        return rows[0] if rows else {}

    @staticmethod
    def _item_filter(item_id, user_id) -> dict:
        # Scoping by owner when known; RLS does the same for anon clients.
        filters = {"id": item_id}
        if user_id is not None:
            filters["user_id"] = user_id
        return filters

    def set_quantity(
        self, item_id: uuid.UUID, quantity: int, user_id: uuid.UUID | None = None
    ) -> None:
        self.store.update(
            CART_TABLE, {"quantity": quantity}, filters=self._item_filter(item_id, user_id)
        )

    def delete(self, item_id: uuid.UUID, user_id: uuid.UUID | None = None) -> None:
        self.store.delete(CART_TABLE, filters=self._item_filter(item_id, user_id))

    def clear_user_cart(self, user_id: uuid.UUID) -> None:
        self.store.delete(CART_TABLE, filters={"user_id": user_id})
