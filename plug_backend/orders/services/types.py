# orders/services/types.py

"""
ORDER PLACEMENT VALUE TYPES

All immutable. OrderDraft is what a backend persists; PlacedOrder / HandOff
are what placement hands back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from cart.store import CartLineItem, ProductRef

ORDER_TYPE_GUEST = "guest"
ORDER_TYPE_POINT_OF_SALE = "point-of-sale"


@dataclass(frozen=True)
class Operator:
    """
    The authenticated staff member entering a point-of-sale order.
    """

    id: str
    display_name: str

    @classmethod
    def from_user(cls, user) -> "Operator":
        display_name = getattr(user, "display_name", "") or getattr(user, "email", "") or ""
        return cls(id=str(user.pk), display_name=display_name)


@dataclass(frozen=True)
class OrderDraft:
    type: str
    customer_name: str
    items: tuple[CartLineItem, ...]
    total: Decimal
    cashier_id: str = ""
    cashier_name: str = ""


@dataclass(frozen=True)
class StockRecord:
    ref: ProductRef
    stock: int
    name: str = ""


@dataclass(frozen=True)
class PlacedOrder:
    order_id: str
    total: Decimal


@dataclass(frozen=True)
class HandOff:
    address: str
    message: str
    url: str
    order_id: str = ""


@dataclass(frozen=True)
class StorefrontSettings:
    store_name: str
    currency: str
    contact_number: str
    counter_default_customer_name: str

    @classmethod
    def from_django(cls) -> "StorefrontSettings":
        conf = settings.STOREFRONT
        return cls(
            store_name=conf["NAME"],
            currency=conf["CURRENCY"],
            contact_number=conf["CONTACT_NUMBER"],
            counter_default_customer_name=conf["COUNTER_DEFAULT_CUSTOMER_NAME"],
        )
