# app/repositories/order_repo.py
import uuid
from decimal import Decimal

from app.database import DataStore, Row

ORDERS_TABLE = "marketplace_orders"
ORDER_ITEMS_TABLE = "order_items"


class OrderRepository:
    """
    Data access layer for marketplace_orders and order_items.

    NOTE:
      - The store only guarantees single-request atomicity. Header and
        lines are separate calls; the service sequences them.
      - Money goes out as float (JSON has no decimal type); totals are
        already cents, unit prices are sent as read.
    """

    def __init__(self, store: DataStore):
        self.store = store

    # ---- Orders ----

    def list_for_user(self, user_id: uuid.UUID) -> list[Row]:
        return self.store.select(
            ORDERS_TABLE,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
        )

    def list_pending_for_user(self, user_id: uuid.UUID) -> list[Row]:
        return self.store.select(
            ORDERS_TABLE,
            filters={"user_id": user_id, "status": "pending"},
        )

    def create_order(
        self,
        *,
        user_id: uuid.UUID,
        total_amount: Decimal,
        delivery_address: str,
        delivery_phone: str,
        notes: str,
    ) -> Row:
        """
        Insert an order header with status 'pending' and return the stored row.
        """
        rows = self.store.insert(
            ORDERS_TABLE,
            {
                "user_id": str(user_id),
                "status": "pending",
                "total_amount": float(total_amount),
                "delivery_address": delivery_address,
                "delivery_phone": delivery_phone,
                "notes": notes,
            },
        )
        return rows[0]

    def delete_order(self, order_id: uuid.UUID) -> None:
        self.store.delete(ORDERS_TABLE, filters={"id": order_id})

    # ---- Order items ----

    def list_items_for_order(self, order_id: uuid.UUID) -> list[Row]:
        return self.store.select(ORDER_ITEMS_TABLE, filters={"order_id": order_id})

    def create_items(self, order_id: uuid.UUID, lines: list[tuple]) -> list[Row]:
        """
        Bulk insert order lines.

        Args:
            lines: (product_id, quantity, price_at_purchase) tuples
        """
        rows = [
            {
                "order_id": str(order_id),
                "product_id": str(product_id),
                "quantity": quantity,
                "price_at_purchase": float(price),
            }
            for product_id, quantity, price in lines
        ]
        return self.store.insert(ORDER_ITEMS_TABLE, rows)
