# app/schemas/product.py
import uuid
from decimal import Decimal

from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Product representation for clients (read-only catalog view).
    """

    id: uuid.UUID
    name: str
    price: Decimal
    original_price: Decimal | None = None
    unit: str = "Per kg"
    image: str = ""
    in_stock: bool = False
    farm: str = "Unknown Farm"
    location: str = "Unknown Location"
    category: str = "Other"


class CategoryRead(SQLModel):
    id: uuid.UUID
    name: str
    icon: str = ""
    emoji: str = ""
