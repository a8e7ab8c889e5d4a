# app/repositories/favorite_repo.py
import uuid

from app.database import DataStore, Row

FAVORITES_TABLE = "product_favorites"
PRODUCT_JOIN = (
    "marketplace_products(*, farms(name, location), product_categories(name))"
)


class FavoriteRepository:
    """
    Data access layer for product_favorites.

    A favorite is a (user_id, product_id) pair; no other state.
    """

    def __init__(self, store: DataStore):
        self.store = store

    # Favorites for a user, joined with the full product row
    def list_for_user(self, user_id: uuid.UUID) -> list[Row]:
        return self.store.select(
            FAVORITES_TABLE,
            filters={"user_id": user_id},
            joins=(PRODUCT_JOIN,),
            order_by="created_at",
            descending=True,
        )

    def get_item(self, user_id: uuid.UUID, product_id: uuid.UUID) -> Row | None:
        rows = self.store.select(
            FAVORITES_TABLE,
            filters={"user_id": user_id, "product_id": product_id},
        )
        return rows[0] if rows else None

    def create(self, user_id: uuid.UUID, product_id: uuid.UUID) -> Row:
        rows = self.store.insert(
            FAVORITES_TABLE,
            {"user_id": str(user_id), "product_id": str(product_id)},
        )
        return rows[0] if rows else {}

    def delete(self, user_id: uuid.UUID, product_id: uuid.UUID) -> None:
        self.store.delete(
            FAVORITES_TABLE,
            filters={"user_id": user_id, "product_id": product_id},
        )
