# orders/services/placement.py

"""
ORDER PLACEMENT (APPLICATION SERVICE)

Two ways a cart becomes an order:

Guest (storefront):
- Validate (non-empty cart, customer name) before any I/O.
- Record the order unconditionally (no stock check; fulfilment is manual
  and confirmed over WhatsApp, so guest orders may oversell).
- Return a HandOff (address + message + wa.me link).

Point-of-sale (cashier):
- One backend transaction: lock every line's stock row (sorted by ref),
  then check lines in cart order and abort on the first line
  that is missing or short, then decrement all lines and create the order.
- Nothing is committed unless every line passes.

Both:
- The cart is cleared only after success; any failure leaves it untouched.
- Placement reads an immutable snapshot of the cart, taken once up front.
"""

from __future__ import annotations

import logging

from cart.store import CartStore, ProductRef
from orders.services.backends import OrderBackend, StockTransaction
from orders.services.exceptions import (
    CustomerNameRequiredError,
    EmptyCartError,
    InsufficientStockError,
    ProductNotFoundError,
)
from orders.services.handoff import build_guest_message, build_handoff, build_order_summary
from orders.services.types import (
    ORDER_TYPE_GUEST,
    ORDER_TYPE_POINT_OF_SALE,
    HandOff,
    Operator,
    OrderDraft,
    PlacedOrder,
    StorefrontSettings,
)

logger = logging.getLogger(__name__)


def _lock_order(lines) -> list[ProductRef]:
    return sorted({line.ref for line in lines}, key=lambda ref: (ref.category_key, ref.product_id))


class OrderPlacement:
    def __init__(self, backend: OrderBackend, settings: StorefrontSettings | None = None):
        self.backend = backend
        self.settings = settings or StorefrontSettings.from_django()

    # -----------------------------
    # Guest
    # -----------------------------
    async def place_guest_order(self, cart: CartStore, customer_name: str) -> HandOff:
        lines = cart.snapshot()
        if not lines:
            raise EmptyCartError()

        name = (customer_name or "").strip()
        if not name:
            raise CustomerNameRequiredError()

        draft = OrderDraft(
            type=ORDER_TYPE_GUEST,
            customer_name=name,
            items=lines,
            total=cart.total(),
        )

        order_id = await self.backend.create_order(draft)

        summary = build_order_summary(draft.items, self.settings.currency)
        message = build_guest_message(
            store_name=self.settings.store_name,
            customer_name=draft.customer_name,
            summary=summary,
            total=draft.total,
            currency=self.settings.currency,
        )
        handoff = build_handoff(
            address=self.settings.contact_number,
            message=message,
            order_id=order_id,
        )

        cart.clear()
        logger.info(
            "Guest order placed",
            extra={"order_id": order_id, "total": str(draft.total), "lines": len(lines)},
        )
        return handoff

    # -----------------------------
    # Point of sale
    # -----------------------------
    async def place_counter_order(
        self,
        cart: CartStore,
        customer_name: str | None,
        operator: Operator,
    ) -> PlacedOrder:
        lines = cart.snapshot()
        if not lines:
            raise EmptyCartError()

        draft = OrderDraft(
            type=ORDER_TYPE_POINT_OF_SALE,
            customer_name=(customer_name or "").strip() or self.settings.counter_default_customer_name,
            items=lines,
            total=cart.total(),
            cashier_id=operator.id,
            cashier_name=operator.display_name,
        )

        def work(txn: StockTransaction) -> str:
            # rows are locked in one global order so two carts holding the
            # same products in different orders cannot deadlock
            records = {ref: txn.read(ref) for ref in _lock_order(draft.items)}

            checked = []
            for line in draft.items:
                record = records[line.ref]
                if record is None:
                    raise ProductNotFoundError(line.name, line.product_id)
                if record.stock < line.quantity:
                    raise InsufficientStockError(line.name, record.stock, line.quantity)
                checked.append((line, record))

            for line, record in checked:
                txn.write(line.ref, record.stock - line.quantity)

            return txn.create_order(draft)

        order_id = await self.backend.run_in_transaction(work)

        cart.clear()
        logger.info(
            "Point-of-sale order placed",
            extra={"order_id": order_id, "total": str(draft.total), "cashier_id": operator.id},
        )
        return PlacedOrder(order_id=order_id, total=draft.total)
