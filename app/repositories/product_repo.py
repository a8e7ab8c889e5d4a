# app/repositories/product_repo.py
from __future__ import annotations
import uuid

from app.database import DataStore, Row

PRODUCTS_TABLE = "marketplace_products"
CATEGORIES_TABLE = "product_categories"
PRODUCT_JOINS = ("farms(name, location)", "product_categories(name)")


class ProductRepository:
    """
    Data access layer for marketplace_products and product_categories
    (read-only here).

    - Pure store operations.
    - No FastAPI, no business logic.
    """

    def __init__(self, store: DataStore):
        self.store = store

    def get_by_id(self, product_id: uuid.UUID) -> Row | None:
        rows = self.store.select(
            PRODUCTS_TABLE,
            filters={"id": product_id},
            joins=PRODUCT_JOINS,
        )
        return rows[0] if rows else None

    def list(self, category_id: uuid.UUID | None = None) -> list[Row]:
        filters = {"in_stock": True}
        if category_id is not None:
            filters["category_id"] = category_id
        return self.store.select(
            PRODUCTS_TABLE,
            filters=filters,
            joins=PRODUCT_JOINS,
            order_by="created_at",
            descending=True,
        )

    def list_categories(self) -> list[Row]:
        return self.store.select(CATEGORIES_TABLE, order_by="name")
