# app/routers/favorites.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import require_auth
from app.database import DataStore, get_store
from app.repositories.favorite_repo import FavoriteRepository
from app.schemas.favorite import FavoriteStatus
from app.schemas.product import ProductRead
from app.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["Favorites"])


def get_favorite_service(store: DataStore = Depends(get_store)) -> FavoriteService:
    return FavoriteService(FavoriteRepository(store))


def _status(service: FavoriteService, user_id: uuid.UUID, product_id: uuid.UUID) -> FavoriteStatus:
    return FavoriteStatus(
        product_id=product_id, is_favorite=service.is_favorite(user_id, product_id)
    )


def _ensure(success: bool, detail: str) -> None:
    if not success:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


@router.get("", response_model=list[ProductRead])
def list_my_favorites(
    user_id: uuid.UUID = Depends(require_auth),
    service: FavoriteService = Depends(get_favorite_service),
):
    """
    Current user's favorited products, most recent first.
    """
    return service.get_favorites(user_id)


@router.get("/{product_id}", response_model=FavoriteStatus)
def get_favorite_status(
    product_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_auth),
    service: FavoriteService = Depends(get_favorite_service),
):
    return _status(service, user_id, product_id)


@router.post("/{product_id}", response_model=FavoriteStatus)
def add_favorite(
    product_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_auth),
    service: FavoriteService = Depends(get_favorite_service),
):
    _ensure(service.add_to_favorites(user_id, product_id), "Could not add favorite")
    return FavoriteStatus(product_id=product_id, is_favorite=True)


@router.delete("/{product_id}", response_model=FavoriteStatus)
def remove_favorite(
    product_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_auth),
    service: FavoriteService = Depends(get_favorite_service),
):
    _ensure(service.remove_from_favorites(user_id, product_id), "Could not remove favorite")
    return FavoriteStatus(product_id=product_id, is_favorite=False)


@router.post("/{product_id}/toggle", response_model=FavoriteStatus)
def toggle_favorite(
    product_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_auth),
    service: FavoriteService = Depends(get_favorite_service),
):
    """
    Flip the favorite state and return the new one.
    """
    _ensure(service.toggle_favorite(user_id, product_id), "Could not update favorite")
    return _status(service, user_id, product_id)
