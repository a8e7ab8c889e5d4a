# app/services/favorite_service.py
import logging
import uuid

from app.core.exceptions import StoreError
from app.repositories.favorite_repo import FavoriteRepository
from app.schemas.product import ProductRead
from app.services.product_service import to_product_read

logger = logging.getLogger(__name__)


class FavoriteService:
    """
    Per-user product favorites.

    Same contract as the cart: mutations return True/False, reads degrade
    to an empty result, None user means unauthenticated.
    """

    def __init__(self, repo: FavoriteRepository):
        self.repo = repo

    def get_favorites(self, user_id: uuid.UUID | None) -> list[ProductRead]:
        """Favorited products, most recently favorited first."""
        if user_id is None:
            logger.info("get_favorites: no user logged in")
            return []
        try:
            rows = self.repo.list_for_user(user_id)
        except StoreError as e:
            logger.error("get_favorites failed for user %s: %s", user_id, e)
            return []

        products = []
        for row in rows:
            product = row.get("marketplace_products")
            if not product:
                logger.warning(
                    "get_favorites: product %s of user %s is no longer available",
                    row.get("product_id"),
                    user_id,
                )
                continue
            products.append(to_product_read(product))
        return products

    def is_favorite(self, user_id: uuid.UUID | None, product_id: uuid.UUID) -> bool:
        if user_id is None:
            return False
        try:
            return self.repo.get_item(user_id, product_id) is not None
        except StoreError as e:
            logger.error("is_favorite failed for user %s, product %s: %s", user_id, product_id, e)
            return False

    def add_to_favorites(self, user_id: uuid.UUID | None, product_id: uuid.UUID) -> bool:
        """
        Favorite a product. Favoriting it twice keeps a single row.
        """
        if user_id is None:
            logger.info("add_to_favorites: no user logged in")
            return False
        try:
            if self.repo.get_item(user_id, product_id) is None:
                self.repo.create(user_id, product_id)
        except StoreError as e:
            logger.error(
                "add_to_favorites failed for user %s, product %s: %s", user_id, product_id, e
            )
            return False
        return True

    def remove_from_favorites(
        self, user_id: uuid.UUID | None, product_id: uuid.UUID
    ) -> bool:
        if user_id is None:
            logger.info("remove_from_favorites: no user logged in")
            return False
        try:
            self.repo.delete(user_id, product_id)
        except StoreError as e:
            logger.error(
                "remove_from_favorites failed for user %s, product %s: %s",
                user_id,
                product_id,
                e,
            )
            return False
        return True

    def toggle_favorite(self, user_id: uuid.UUID | None, product_id: uuid.UUID) -> bool:
        """
        Flip the favorite state. Returns whether the write succeeded,
        not the resulting state.
        """
        if self.is_favorite(user_id, product_id):
            return self.remove_from_favorites(user_id, product_id)
        return self.add_to_favorites(user_id, product_id)
