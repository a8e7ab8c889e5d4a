# app/services/order_service.py
import logging
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

from pydantic import ValidationError

from app.core.exceptions import (
    EmptyCartError,
    IncompleteProfileError,
    OrderCreationError,
    StoreError,
)
from app.repositories.order_repo import OrderRepository
from app.repositories.profile_repo import ProfileRepository
from app.schemas.order import DeliveryInfo, OrderRead
from app.services import pricing
from app.services.cart_service import CartService

logger = logging.getLogger(__name__)

PLACEHOLDER_ADDRESS = "Please update your delivery address"

# Headers younger than this may still be waiting for their lines.
ORPHAN_MIN_AGE = timedelta(minutes=5)


class OrderPricingPolicy(str, Enum):
    """
    What goes into marketplace_orders.total_amount.

    Applied identically to checkout and buy-now.
    """

    SUBTOTAL = "subtotal"
    GRAND_TOTAL = "grand_total"


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from cart (header -> lines -> clear cart)
      - Create order for a single product (buy now, cart untouched)
      - Resolve delivery info from the user's profile
      - Compensate / repair headers left without lines
      - List the user's orders
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        profile_repo: ProfileRepository,
        cart_service: CartService,
        *,
        pricing_policy: OrderPricingPolicy = OrderPricingPolicy.SUBTOTAL,
        require_delivery_address: bool = False,
        compensate_failed_orders: bool = True,
    ):
        self.order_repo = order_repo
        self.profile_repo = profile_repo
        self.cart_service = cart_service
        self.pricing_policy = OrderPricingPolicy(pricing_policy)
        self.require_delivery_address = require_delivery_address
        self.compensate_failed_orders = compensate_failed_orders

    # -------- User-facing operations --------

    def create_order_from_cart(
        self,
        user_id: uuid.UUID | None,
        notes: str = "",
    ) -> uuid.UUID | None:
        """
        Convert the user's cart into an Order.

        Steps:
          1. Load cart lines (store errors propagate); error if empty.
          2. Resolve delivery info from the profile.
          3. Compute total_amount per pricing policy.
          4. Create Order row (status='pending').
          5. Create OrderItem rows, price_at_purchase = current product price.
          6. Clear cart. A failed clear is logged; the order still stands.

        Returns:
            The new order id, or None if no user is logged in.

        Raises:
            EmptyCartError: cart has no lines (nothing is written).
            UnavailableProductError: a line points at a missing product
                (nothing is written).
            IncompleteProfileError: address required but missing.
            OrderCreationError: header or lines could not be written.
            StoreError: the cart could not be read.
        """
        if user_id is None:
            logger.info("create_order_from_cart: no user logged in")
            return None

        items = self.cart_service.load_cart_items(user_id)
        if not items:
            raise EmptyCartError(user_id)

        delivery = self.resolve_delivery_info(user_id)
        order_id = self._place_order(
            user_id,
            total_amount=self._order_total(items),
            delivery=delivery,
            notes=notes,
            lines=[(it.product_id, it.quantity, it.unit_price) for it in items],
        )

        if not self.cart_service.clear_cart(user_id):
            logger.error(
                "Order %s placed but cart of user %s was not cleared", order_id, user_id
            )

        return order_id

    def create_order_for_product(
        self,
        user_id: uuid.UUID | None,
        product,
        quantity: int = 1,
        notes: str = "",
    ) -> uuid.UUID | None:
        """
        Buy now: order a single product without going through the cart.

        `product` is any object with `id` and `price` (ProductRead, CartProduct).
        """
        if user_id is None:
            logger.info("create_order_for_product: no user logged in")
            return None

        line = pricing.PricedLine(pricing.to_decimal(product.price), quantity)
        delivery = self.resolve_delivery_info(user_id)
        return self._place_order(
            user_id,
            total_amount=self._order_total([line]),
            delivery=delivery,
            notes=notes,
            lines=[(product.id, quantity, line.unit_price)],
        )

    def list_user_orders(self, user_id: uuid.UUID | None) -> list[OrderRead]:
        """
        List the user's orders (without items), newest first.
        Store errors degrade to an empty list.
        """
        if user_id is None:
            return []
        try:
            rows = self.order_repo.list_for_user(user_id)
        except StoreError as e:
            logger.error("list_user_orders failed for user %s: %s", user_id, e)
            return []
        orders = []
        for row in rows:
            try:
                orders.append(OrderRead.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping unreadable order %s: %s", row.get("id"), e)
        return orders

    def repair_orphaned_orders(
        self,
        user_id: uuid.UUID,
        min_age: timedelta = ORPHAN_MIN_AGE,
    ) -> list[uuid.UUID]:
        """
        Delete the user's pending order headers that have no lines.

        Headers newer than `min_age` are skipped, since their lines may
        still be in flight.

        Returns:
            Ids of the removed headers.
        """
        cutoff = datetime.now(timezone.utc) - min_age
        removed: list[uuid.UUID] = []

        for row in self.order_repo.list_pending_for_user(user_id):
            order = OrderRead.model_validate(row)
            if order.created_at is not None:
                created = order.created_at
                if created.tzinfo is None:
                    created = created.replace(tzinfo=timezone.utc)
                if created > cutoff:
                    continue
            if self.order_repo.list_items_for_order(order.id):
                continue
            self.order_repo.delete_order(order.id)
            logger.warning("Removed orphaned order %s of user %s", order.id, user_id)
            removed.append(order.id)

        return removed

    # -------- Helpers --------

    def resolve_delivery_info(self, user_id: uuid.UUID) -> DeliveryInfo:
        """
        Delivery address/phone from the profile table.

        Address falls back to "<full_name>'s address", then to a placeholder,
        unless require_delivery_address is set.
        """
        try:
            profile = self.profile_repo.get_by_user_id(user_id)
        except StoreError as e:
            logger.warning("Profile lookup failed for user %s: %s", user_id, e)
            profile = None
        profile = profile or {}

        address = (profile.get("address") or "").strip()
        phone = profile.get("phone") or ""
        if address:
            return DeliveryInfo(address=address, phone=phone)

        if self.require_delivery_address:
            raise IncompleteProfileError(user_id)

        full_name = profile.get("full_name")
        fallback = f"{full_name}'s address" if full_name else PLACEHOLDER_ADDRESS
        return DeliveryInfo(address=fallback, phone=phone, complete=False)

    def _order_total(self, lines) -> Decimal:
        if self.pricing_policy is OrderPricingPolicy.GRAND_TOTAL:
            return pricing.grand_total(lines)
        return pricing.subtotal(lines)

    def _place_order(
        self,
        user_id: uuid.UUID,
        *,
        total_amount: Decimal,
        delivery: DeliveryInfo,
        notes: str,
        lines: list[tuple],
    ) -> uuid.UUID:
        """
        Write the header, then its lines. Header must exist before lines.
        """
        if not delivery.complete:
            logger.warning(
                "Placing order for user %s without a delivery address on file", user_id
            )

        try:
            header = self.order_repo.create_order(
                user_id=user_id,
                total_amount=total_amount,
                delivery_address=delivery.address,
                delivery_phone=delivery.phone,
                notes=notes,
            )
        except StoreError as e:
            logger.error("Order header insert failed for user %s: %s", user_id, e)
            raise OrderCreationError("Could not create order") from e

        order_id = uuid.UUID(str(header["id"]))

        try:
            self.order_repo.create_items(order_id, lines)
        except StoreError as e:
            logger.error("Order items insert failed for order %s: %s", order_id, e)
            if self.compensate_failed_orders:
                self._discard_header(order_id)
            raise OrderCreationError("Could not save order items", order_id=order_id) from e

        logger.info(
            "Order %s created for user %s (%d lines, total %s)",
            order_id,
            user_id,
            len(lines),
            total_amount,
        )
        return order_id

    def _discard_header(self, order_id: uuid.UUID) -> None:
        try:
            self.order_repo.delete_order(order_id)
        except StoreError as e:
            # Left for repair_orphaned_orders.
            logger.error("Could not remove orphaned order %s: %s", order_id, e)
