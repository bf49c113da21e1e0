# orders/tests/helpers.py

from decimal import Decimal

from cart.store import CartStore, ProductRef, ProductSnapshot
from orders.services.types import Operator, StorefrontSettings

STOREFRONT = StorefrontSettings(
    store_name="Pip Beach Plug",
    currency="EGP",
    contact_number="201019284462",
    counter_default_customer_name="In-Store Customer",
)

CASHIER = Operator(id="cashier-1", display_name="Mona Cashier")


def snapshot(pid: str, price: str, *, name: str | None = None, category: str = "smokes"):
    return ProductSnapshot(
        ref=ProductRef(category_key=category, product_id=pid),
        name=name or pid.title(),
        price=Decimal(price),
    )


def cart_with(*entries) -> CartStore:
    """
    entries: (ProductSnapshot, quantity) pairs
    """
    cart = CartStore()
    for product, quantity in entries:
        for _ in range(quantity):
            cart.add_or_increment(product)
    return cart
