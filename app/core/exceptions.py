# app/core/exceptions.py
"""
Domain exceptions for the storefront backend.

Services raise these; routers translate them to HTTP errors.
Raw store errors are never sent to clients.
"""


class MarketplaceException(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context (ids, table names...)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class StoreError(MarketplaceException):
    """Raised when the remote data store rejects or fails a call."""

    def __init__(self, operation: str, table: str, message: str):
        super().__init__(
            f"{operation} on {table} failed: {message}",
            details={"operation": operation, "table": table},
        )
        self.operation = operation
        self.table = table


# ---- Cart ----


class CartException(MarketplaceException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartError(CartException):
    """Raised when checkout is attempted on a cart with no lines."""

    def __init__(self, user_id):
        super().__init__("Your cart is empty", details={"user_id": user_id})
        self.user_id = user_id


# ---- Orders ----


class OrderException(MarketplaceException):
    """Base exception for order-related errors."""
    pass


class OrderCreationError(OrderException):
    """
    Raised when an order header or its lines could not be persisted.

    `order_id` is set when the header was written before the failure.
    """

    def __init__(self, message: str, order_id=None):
        super().__init__(message, details={"order_id": order_id})
        self.order_id = order_id


class IncompleteProfileError(OrderException):
    """Raised when delivery info is required but the profile has no address."""

    def __init__(self, user_id):
        super().__init__(
            "Please update your delivery address before placing an order",
            details={"user_id": user_id},
        )
        self.user_id = user_id


# ---- Products ----


class ProductNotFoundError(MarketplaceException):
    """Raised when a product id does not resolve to a row."""

    def __init__(self, product_id):
        super().__init__(
            f"Product {product_id} not found",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class UnavailableProductError(CartException):
    """
    Raised when cart lines point at products that can no longer be read
    (deleted or hidden), so they cannot be priced.
    """

    def __init__(self, product_ids: list):
        super().__init__(
            "Some items in your cart are no longer available",
            details={"product_ids": product_ids},
        )
        self.product_ids = product_ids
