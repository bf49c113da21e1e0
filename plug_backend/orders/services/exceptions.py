# orders/services/exceptions.py

"""
ORDER PLACEMENT ERRORS

Each error carries a stable `code` (API error code) and a user-facing message.
Views translate them with error_response(); services only raise.

Validation (raised before any I/O):
- EmptyCartError, CustomerNameRequiredError

Transaction aborts (point-of-sale only):
- ProductNotFoundError, InsufficientStockError

Infrastructure:
- BackendUnavailableError (retryable by the caller)
- StockConflictError (internal; the backend retries it)
"""

from __future__ import annotations


class PlacementError(Exception):
    code = "PLACEMENT_FAILED"
    default_message = "Order could not be placed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyCartError(PlacementError):
    code = "EMPTY_CART"
    default_message = "Your cart is empty."


class CustomerNameRequiredError(PlacementError):
    code = "CUSTOMER_NAME_REQUIRED"
    default_message = "Please enter your name."


class ProductNotFoundError(PlacementError):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, item_name: str, product_id: str = ""):
        self.item_name = item_name
        self.product_id = product_id
        super().__init__(f"Product {item_name} not found.")


class InsufficientStockError(PlacementError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, item_name: str, available: int, requested: int):
        self.item_name = item_name
        self.available = available
        self.requested = requested
        super().__init__(
            f'Not enough stock for "{item_name}". Available: {available}, Requested: {requested}'
        )


class BackendUnavailableError(PlacementError):
    code = "BACKEND_UNAVAILABLE"
    default_message = "Could not place your order. Please try again."
    retryable = True


class StockConflictError(Exception):
    """
    A stock row changed between read and write inside a transaction attempt.
    Never leaves the backend: the attempt is rolled back and retried.
    """
