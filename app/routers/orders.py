# app/routers/orders.py
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import require_auth
from app.core.config import get_settings
from app.core.exceptions import (
    EmptyCartError,
    IncompleteProfileError,
    MarketplaceException,
    ProductNotFoundError,
    UnavailableProductError,
)
from app.database import DataStore, get_store
from app.repositories.order_repo import OrderRepository
from app.repositories.profile_repo import ProfileRepository
from app.routers.cart import get_cart_service
from app.routers.products import get_product_service
from app.schemas.order import (
    BuyNowRequest,
    CheckoutRequest,
    OrderCreated,
    OrderRead,
    RepairResult,
)
from app.services.cart_service import CartService
from app.services.order_service import OrderService
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_service(
    store: DataStore = Depends(get_store),
    cart_service: CartService = Depends(get_cart_service),
) -> OrderService:
    settings = get_settings()
    return OrderService(
        OrderRepository(store),
        ProfileRepository(store, settings.PROFILE_TABLE),
        cart_service,
        pricing_policy=settings.ORDER_TOTAL_POLICY,
        require_delivery_address=settings.REQUIRE_DELIVERY_ADDRESS,
        compensate_failed_orders=settings.COMPENSATE_FAILED_ORDERS,
    )


def _to_http(e: MarketplaceException) -> HTTPException:
    """
    Map domain errors to HTTP errors. Store details stay in the logs.
    """
    if isinstance(e, EmptyCartError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if isinstance(e, UnavailableProductError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": e.message, "product_ids": [str(p) for p in e.product_ids]},
        )
    if isinstance(e, IncompleteProfileError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message
        )
    if isinstance(e, ProductNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    logger.error("Order request failed: %r", e)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail="Could not place order, please try again",
    )


@router.post("/checkout", response_model=OrderCreated)
def checkout(
    payload: CheckoutRequest,
    user_id: uuid.UUID = Depends(require_auth),
    service: OrderService = Depends(get_order_service),
):
    """
    Create an order from the current user's cart, then clear the cart.
    """
    try:
        order_id = service.create_order_from_cart(user_id, notes=payload.notes)
    except MarketplaceException as e:
        raise _to_http(e)
    return OrderCreated(order_id=order_id)


@router.post("/buy-now", response_model=OrderCreated)
def buy_now(
    payload: BuyNowRequest,
    user_id: uuid.UUID = Depends(require_auth),
    service: OrderService = Depends(get_order_service),
    products: ProductService = Depends(get_product_service),
):
    """
    Order a single product directly. The cart is not touched.
    """
    try:
        product = products.get_product(payload.product_id)
        order_id = service.create_order_for_product(
            user_id, product, payload.quantity, notes=payload.notes
        )
    except MarketplaceException as e:
        raise _to_http(e)
    return OrderCreated(order_id=order_id)


@router.get("/me", response_model=list[OrderRead])
def list_my_orders(
    user_id: uuid.UUID = Depends(require_auth),
    service: OrderService = Depends(get_order_service),
):
    """
    List the authenticated user's orders (without items).
    """
    return service.list_user_orders(user_id)


@router.post("/me/repair", response_model=RepairResult)
def repair_my_orders(
    user_id: uuid.UUID = Depends(require_auth),
    service: OrderService = Depends(get_order_service),
):
    """
    Remove pending orders of the current user that were left without items.
    """
    try:
        removed = service.repair_orphaned_orders(user_id)
    except MarketplaceException as e:
        raise _to_http(e)
    return RepairResult(removed=removed)
