# app/repositories/profile_repo.py
import uuid

from app.core.config import get_settings
from app.database import DataStore, Row


class ProfileRepository:
    """
    Read access to the user profile table (delivery info only).
    """

    def __init__(self, store: DataStore, table: str | None = None):
        self.store = store
        self.table = table or get_settings().PROFILE_TABLE

    def get_by_user_id(self, user_id: uuid.UUID) -> Row | None:
        """Return the profile row for this user, or None if not found."""
        rows = self.store.select(self.table, filters={"id": user_id})
        return rows[0] if rows else None
