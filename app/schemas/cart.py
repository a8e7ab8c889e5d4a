# app/schemas/cart.py
import uuid
from decimal import Decimal

from sqlmodel import SQLModel, Field


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart.
    """

    product_id: uuid.UUID
    quantity: int = Field(default=1, gt=0)


class CartItemUpdate(SQLModel):
    """
    Payload for updating quantity of a cart item.

    quantity <= 0 removes the line.
    """

    quantity: int


class CartProduct(SQLModel):
    """
    Live product projection embedded in a cart line.
    Price is read at request time, never stored on the cart row.
    """

    id: uuid.UUID
    name: str
    price: Decimal
    image: str = ""
    unit: str = "Per kg"
    farm: str = "Unknown Farm"


class CartItemRead(SQLModel):
    """
    Read model for a single cart line, enriched with its product.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    quantity: int
    product: CartProduct

    @property
    def unit_price(self) -> Decimal:
        return self.product.price


class PriceBreakdown(SQLModel):
    """
    Totals shown on the cart screen.
    """

    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    grand_total: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartItemRead]
    total_items: int
    totals: PriceBreakdown
