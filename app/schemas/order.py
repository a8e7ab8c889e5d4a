# app/schemas/order.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class CheckoutRequest(SQLModel):
    """
    Payload for creating an order from the current cart.

    Backend derives:
      - user_id from token
      - status = 'pending'
      - total_amount from cart (per configured pricing policy)
      - delivery address/phone from the user's profile
      - items from cart
    """

    model_config = ConfigDict(extra="forbid")

    notes: str = ""

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, v: str | None) -> str:
        if v is None:
            return ""
        return v.strip()


class BuyNowRequest(CheckoutRequest):
    """
    Payload for ordering a single product directly, bypassing the cart.
    """

    product_id: uuid.UUID
    quantity: int = Field(default=1, gt=0)


class OrderCreated(SQLModel):
    order_id: uuid.UUID


class OrderRead(SQLModel):
    """
    Lightweight representation of an order header (without items).
    """

    id: uuid.UUID
    user_id: uuid.UUID
    # "pending" on creation; later states are set by fulfilment and are not
    # restricted here.
    status: str
    total_amount: Decimal
    delivery_address: str
    delivery_phone: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeliveryInfo(SQLModel):
    """
    Delivery metadata resolved from the user's profile.
    `complete` is False when the address is a placeholder.
    """

    address: str
    phone: str = ""
    complete: bool = True


class RepairResult(SQLModel):
    removed: list[uuid.UUID]
