# app/schemas/favorite.py
import uuid

from sqlmodel import SQLModel


class FavoriteStatus(SQLModel):
    product_id: uuid.UUID
    is_favorite: bool
