# app/services/product_service.py
import logging
import uuid

from app.core.exceptions import ProductNotFoundError, StoreError
from app.database import Row
from app.repositories.product_repo import ProductRepository
from app.schemas.product import CategoryRead, ProductRead
from app.services import pricing

logger = logging.getLogger(__name__)


def to_product_read(row: Row) -> ProductRead:
    """
    Map a product row (with optional farms / product_categories embeds)
    to ProductRead, filling display defaults.
    """
    farm = row.get("farms") or {}
    category = row.get("product_categories") or {}
    original_price = row.get("original_price")
    return ProductRead(
        id=row["id"],
        name=row["name"],
        price=pricing.to_decimal(row["price"]),
        original_price=(
            pricing.to_decimal(original_price) if original_price is not None else None
        ),
        unit=row.get("unit") or "Per kg",
        image=row.get("image") or "",
        in_stock=bool(row.get("in_stock")),
        farm=farm.get("name") or "Unknown Farm",
        location=farm.get("location") or "Unknown Location",
        category=category.get("name") or "Other",
    )


class ProductService:
    """
    Read-only catalog lookups.

    Maps joined farm/category rows to ProductRead with display defaults.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def get_product(self, product_id: uuid.UUID) -> ProductRead:
        """
        Raises:
            ProductNotFoundError: if no row matches.
            StoreError: if the lookup itself fails.
        """
        row = self.repo.get_by_id(product_id)
        if row is None:
            raise ProductNotFoundError(product_id)
        return to_product_read(row)

    def list_products(self, category_id: uuid.UUID | None = None) -> list[ProductRead]:
        """In-stock products, newest first. Store errors degrade to []."""
        try:
            rows = self.repo.list(category_id)
        except StoreError as e:
            logger.error("list_products failed (category %s): %s", category_id, e)
            return []
        return [to_product_read(row) for row in rows]

    def get_categories(self) -> list[CategoryRead]:
        """All categories by name. Store errors degrade to []."""
        try:
            rows = self.repo.list_categories()
        except StoreError as e:
            logger.error("get_categories failed: %s", e)
            return []
        return [
            CategoryRead(
                id=row["id"],
                name=row["name"],
                icon=row.get("icon") or "",
                emoji=row.get("emoji") or "",
            )
            for row in rows
        ]
