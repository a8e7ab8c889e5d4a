# app/routers/cart.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import require_auth
from app.database import DataStore, get_store
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CartSummary, CartItemCreate, CartItemUpdate
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


def get_cart_service(store: DataStore = Depends(get_store)) -> CartService:
    return CartService(CartRepository(store))


def _ensure(success: bool, detail: str) -> None:
    if not success:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


@router.get("", response_model=CartSummary)
def get_my_cart(
    user_id: uuid.UUID = Depends(require_auth),
    service: CartService = Depends(get_cart_service),
):
    """
    Get current user's cart summary with delivery fee, tax and grand total.
    """
    return service.get_cart_summary(user_id)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemCreate,
    user_id: uuid.UUID = Depends(require_auth),
    service: CartService = Depends(get_cart_service),
):
    """
    Add product to the current user's cart (merges with an existing line).

    Returns the updated cart summary.
    """
    _ensure(
        service.add_to_cart(user_id, payload.product_id, payload.quantity),
        "Could not add item to cart",
    )
    return service.get_cart_summary(user_id)


@router.patch("/{cart_item_id}", response_model=CartSummary)
def update_cart_item(
    cart_item_id: uuid.UUID,
    payload: CartItemUpdate,
    user_id: uuid.UUID = Depends(require_auth),
    service: CartService = Depends(get_cart_service),
):
    """
    Update quantity of a cart line. quantity <= 0 removes it.

    Returns the updated cart summary.
    """
    _ensure(
        service.update_quantity(cart_item_id, payload.quantity, user_id=user_id),
        "Could not update cart item",
    )
    return service.get_cart_summary(user_id)


@router.delete("/{cart_item_id}", response_model=CartSummary)
def remove_cart_item(
    cart_item_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_auth),
    service: CartService = Depends(get_cart_service),
):
    """
    Remove a line from the cart.

    Returns the updated cart summary.
    """
    _ensure(
        service.remove_from_cart(cart_item_id, user_id=user_id),
        "Could not remove cart item",
    )
    return service.get_cart_summary(user_id)


@router.delete("", response_model=CartSummary)
def clear_cart(
    user_id: uuid.UUID = Depends(require_auth),
    service: CartService = Depends(get_cart_service),
):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    _ensure(service.clear_cart(user_id), "Could not clear cart")
    return service.get_cart_summary(user_id)
