# cart/store.py

"""
CART STORE (session-scoped, in-memory)

Purpose:
- Own the line items of one checkout session (storefront or cashier).
- Pure state machine: no I/O, no failure modes.

Invariants:
- At most one line per product id (insertion order preserved).
- Every retained line has quantity >= 1; a line reaching zero is removed.
- total() == sum(price * quantity); item_count() == sum(quantity).

Every line carries its ProductRef (category key + product id) from the moment
it is added, so checkout can locate the product's stock record without
re-resolving anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Iterator

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class ProductRef:
    """
    Locates one product record: ids are only unique within a category.
    """

    category_key: str
    product_id: str


@dataclass(frozen=True)
class ProductSnapshot:
    ref: ProductRef
    name: str
    price: Decimal
    image_url: str = ""

    @property
    def id(self) -> str:
        return self.ref.product_id


@dataclass(frozen=True)
class CartLineItem:
    product_id: str
    category_key: str
    name: str
    price: Decimal
    quantity: int
    image_url: str = ""

    @property
    def ref(self) -> ProductRef:
        return ProductRef(category_key=self.category_key, product_id=self.product_id)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CartStore:
    """
    One cart per session. Consumers get the store passed to them; nobody else
    mutates the lines.
    """

    def __init__(self, lines=None):
        self._lines: dict[str, CartLineItem] = {}
        self._subscribers: list[Callable[["CartStore"], None]] = []

        for line in lines or ():
            if line.quantity >= 1 and line.product_id not in self._lines:
                self._lines[line.product_id] = line

    # -----------------------------
    # Observers
    # -----------------------------
    def subscribe(self, callback: Callable[["CartStore"], None]) -> Callable[[], None]:
        """
        Register a callback fired after every mutation. Returns an unsubscribe function.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    # -----------------------------
    # Mutations
    # -----------------------------
    def add_or_increment(self, product: ProductSnapshot) -> CartLineItem:
        existing = self._lines.get(product.id)
        if existing is not None:
            line = replace(existing, quantity=existing.quantity + 1)
        else:
            line = CartLineItem(
                product_id=product.id,
                category_key=product.ref.category_key,
                name=product.name,
                price=Decimal(product.price),
                quantity=1,
                image_url=product.image_url,
            )
        self._lines[product.id] = line
        self._notify()
        return line

    def decrease_or_remove(self, product_id: str) -> CartLineItem | None:
        """
        Returns the retained line, or None when the line is gone.
        """
        existing = self._lines.get(product_id)
        if existing is not None and existing.quantity > 1:
            line = replace(existing, quantity=existing.quantity - 1)
            self._lines[product_id] = line
            self._notify()
            return line

        self._lines.pop(product_id, None)
        self._notify()
        return None

    def remove(self, product_id: str) -> None:
        if self._lines.pop(product_id, None) is not None:
            self._notify()

    def clear(self) -> None:
        self._lines.clear()
        self._notify()

    # -----------------------------
    # Derived values
    # -----------------------------
    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), ZERO)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def get(self, product_id: str) -> CartLineItem | None:
        return self._lines.get(product_id)

    @property
    def lines(self) -> tuple[CartLineItem, ...]:
        return tuple(self._lines.values())

    def snapshot(self) -> tuple[CartLineItem, ...]:
        """
        Immutable copy of the current lines (what checkout reads).
        """
        return self.lines

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLineItem]:
        return iter(self.lines)

    # -----------------------------
    # Session (JSON-safe) representation
    # -----------------------------
    def to_session(self) -> list[dict]:
        return [
            {
                "product_id": line.product_id,
                "category_key": line.category_key,
                "name": line.name,
                "price": str(line.price),
                "quantity": line.quantity,
                "image_url": line.image_url,
            }
            for line in self._lines.values()
        ]

    @classmethod
    def from_session(cls, data) -> "CartStore":
        lines = []
        for raw in data or ():
            try:
                lines.append(
                    CartLineItem(
                        product_id=str(raw["product_id"]),
                        category_key=str(raw["category_key"]),
                        name=str(raw.get("name") or ""),
                        price=Decimal(str(raw["price"])),
                        quantity=int(raw["quantity"]),
                        image_url=str(raw.get("image_url") or ""),
                    )
                )
            except (KeyError, TypeError, ValueError, ArithmeticError):
                logger.warning("Dropping malformed cart line from session", extra={"line": raw})
        return cls(lines)
