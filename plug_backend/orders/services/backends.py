# orders/services/backends.py

"""
ORDER BACKENDS (PERSISTENCE PORT)

Purpose:
- Give order placement two primitives and nothing else:
    create_order(draft)            -> unconditional insert (guest orders)
    run_in_transaction(work)       -> atomic read-then-write (point-of-sale)

Transaction contract:
- work(txn) is a plain synchronous callable.
- Returning from work commits everything it staged; raising aborts everything.
- Conflicts and DatabaseErrors are retried with jittered backoff, bounded by
  TRANSACTION_MAX_ATTEMPTS; exhaustion surfaces as BackendUnavailableError.
- Domain errors raised by work (PlacementError) are never retried.

Implementations:
- DjangoOrderBackend: transaction.atomic + select_for_update + compare-and-set
  stock updates. Runs in Django's sync world via asgiref.sync_to_async.
- InMemoryOrderBackend: dict-backed fake for tests, with failure injection.
"""

from __future__ import annotations

import abc
import asyncio
import logging
import random
import time
from typing import Callable, TypeVar

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from cart.store import ProductRef
from catalog.models import Product
from orders.models import Order, OrderItem
from orders.services.exceptions import BackendUnavailableError, StockConflictError
from orders.services.types import OrderDraft, StockRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_BACKOFF_BASE = 0.005
RETRY_BACKOFF_CAP = 0.2


def _default_max_attempts() -> int:
    return max(1, int(settings.STOREFRONT["TRANSACTION_MAX_ATTEMPTS"]))


def _backoff(attempt: int) -> None:
    # random slice of a capped, doubling window
    time.sleep(random.uniform(0, min(RETRY_BACKOFF_CAP, RETRY_BACKOFF_BASE * 2 ** (attempt - 1))))


# -----------------------------
# Ports
# -----------------------------
class StockTransaction(abc.ABC):
    @abc.abstractmethod
    def read(self, ref: ProductRef) -> StockRecord | None:
        """Current stock for ref, or None if the product does not exist."""

    @abc.abstractmethod
    def write(self, ref: ProductRef, new_stock: int) -> None:
        """Stage a new stock value for a product read in this transaction."""

    @abc.abstractmethod
    def create_order(self, draft: OrderDraft) -> str:
        """Stage an order; returns its id."""


class OrderBackend(abc.ABC):
    @abc.abstractmethod
    async def create_order(self, draft: OrderDraft) -> str:
        ...

    @abc.abstractmethod
    async def run_in_transaction(self, work: Callable[[StockTransaction], T]) -> T:
        ...


# -----------------------------
# Django ORM
# -----------------------------
def _insert_order(draft: OrderDraft, using: str | None = None) -> str:
    order = Order.objects.db_manager(using).create(
        customer_name=draft.customer_name,
        total=draft.total,
        type=draft.type,
        cashier_id=draft.cashier_id,
        cashier_name=draft.cashier_name,
    )
    OrderItem.objects.db_manager(using).bulk_create(
        [
            OrderItem(
                order=order,
                product_id=line.product_id,
                category_key=line.category_key,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
                position=index,
            )
            for index, line in enumerate(draft.items)
        ]
    )
    return str(order.pk)


class DjangoStockTransaction(StockTransaction):
    """
    One attempt of a point-of-sale transaction. Must be used inside
    transaction.atomic().
    """

    def __init__(self, using: str | None = None):
        self.using = using
        self._read_stock: dict[ProductRef, int] = {}

    def _products(self):
        qs = Product.objects.all()
        if self.using:
            qs = qs.using(self.using)
        return qs

    def read(self, ref: ProductRef) -> StockRecord | None:
        try:
            product = (
                self._products()
                .select_for_update()
                .filter(pk=ref.product_id, category=ref.category_key)
                .only("id", "name", "stock")
                .first()
            )
        except ValidationError:
            # malformed id (not a UUID): nothing can exist under it
            return None

        if product is None:
            return None

        stock = int(product.stock)
        self._read_stock[ref] = stock
        return StockRecord(ref=ref, stock=stock, name=product.name)

    def write(self, ref: ProductRef, new_stock: int) -> None:
        if ref not in self._read_stock:
            raise RuntimeError(f"Stock for {ref} was not read in this transaction")
        if new_stock < 0:
            raise ValueError("Stock cannot go below zero")

        expected = self._read_stock[ref]
        updated = (
            self._products()
            .filter(pk=ref.product_id, category=ref.category_key, stock=expected)
            .update(stock=new_stock, updated_at=timezone.now())
        )
        if updated != 1:
            raise StockConflictError(f"Stock for {ref.product_id} changed since it was read")
        self._read_stock[ref] = new_stock

    def create_order(self, draft: OrderDraft) -> str:
        return _insert_order(draft, using=self.using)


class DjangoOrderBackend(OrderBackend):
    def __init__(self, *, max_attempts: int | None = None, using: str | None = None):
        self.max_attempts = max_attempts or _default_max_attempts()
        self.using = using

    async def create_order(self, draft: OrderDraft) -> str:
        return await sync_to_async(self._create_order_sync, thread_sensitive=True)(draft)

    async def run_in_transaction(self, work):
        return await sync_to_async(self._run_sync, thread_sensitive=True)(work)

    # -----------------------------
    # Sync internals
    # -----------------------------
    def _create_order_sync(self, draft: OrderDraft) -> str:
        try:
            with transaction.atomic(using=self.using):
                return _insert_order(draft, using=self.using)
        except DatabaseError as exc:
            logger.exception("Order insert failed", extra={"order_type": draft.type})
            raise BackendUnavailableError() from exc

    def _run_sync(self, work):
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                with transaction.atomic(using=self.using):
                    return work(DjangoStockTransaction(using=self.using))
            except StockConflictError as exc:
                last_error = exc
                logger.warning(
                    "Stock conflict, retrying transaction",
                    extra={"attempt": attempt, "max_attempts": self.max_attempts},
                )
            except DatabaseError as exc:
                last_error = exc
                logger.warning(
                    "Database error in order transaction, retrying",
                    extra={"attempt": attempt, "max_attempts": self.max_attempts, "error": str(exc)},
                )

            if attempt < self.max_attempts:
                _backoff(attempt)

        logger.error(
            "Order transaction gave up",
            extra={"max_attempts": self.max_attempts, "error": str(last_error)},
        )
        raise BackendUnavailableError() from last_error


# -----------------------------
# In-memory (tests)
# -----------------------------
class InMemoryStockTransaction(StockTransaction):
    def __init__(self, backend: "InMemoryOrderBackend"):
        self._backend = backend
        self.staged_stock: dict[ProductRef, int] = {}
        self.staged_orders: dict[str, OrderDraft] = {}
        self._read: set[ProductRef] = set()

    def read(self, ref: ProductRef) -> StockRecord | None:
        product = self._backend.products.get(ref)
        if product is None:
            return None
        self._read.add(ref)
        stock = self.staged_stock.get(ref, product["stock"])
        return StockRecord(ref=ref, stock=stock, name=product["name"])

    def write(self, ref: ProductRef, new_stock: int) -> None:
        if ref not in self._read:
            raise RuntimeError(f"Stock for {ref} was not read in this transaction")
        if new_stock < 0:
            raise ValueError("Stock cannot go below zero")
        self.staged_stock[ref] = new_stock

    def create_order(self, draft: OrderDraft) -> str:
        order_id = self._backend.next_order_id()
        self.staged_orders[order_id] = draft
        return order_id


class InMemoryOrderBackend(OrderBackend):
    """
    Failure injection:
    - unavailable=True          every call raises BackendUnavailableError
    - conflicts=N               the next N transaction attempts conflict (retried)
    - fail_on_commit=exc        the next commit raises exc instead of applying
    """

    def __init__(self, *, max_attempts: int = 5):
        self.max_attempts = max_attempts
        self.products: dict[ProductRef, dict] = {}
        self.orders: dict[str, OrderDraft] = {}
        self.unavailable = False
        self.conflicts = 0
        self.fail_on_commit: Exception | None = None
        self.attempts = 0
        self._sequence = 0
        self._lock = asyncio.Lock()

    def add_product(self, ref: ProductRef, *, stock: int, name: str = "") -> None:
        self.products[ref] = {"stock": stock, "name": name}

    def stock_of(self, ref: ProductRef) -> int:
        return self.products[ref]["stock"]

    def next_order_id(self) -> str:
        self._sequence += 1
        return f"order-{self._sequence}"

    async def create_order(self, draft: OrderDraft) -> str:
        async with self._lock:
            if self.unavailable:
                raise BackendUnavailableError()
            order_id = self.next_order_id()
            self.orders[order_id] = draft
            return order_id

    async def run_in_transaction(self, work):
        for _ in range(self.max_attempts):
            async with self._lock:
                self.attempts += 1
                if self.unavailable:
                    raise BackendUnavailableError()
                if self.conflicts > 0:
                    self.conflicts -= 1
                    continue

                txn = InMemoryStockTransaction(self)
                result = work(txn)

                if self.fail_on_commit is not None:
                    exc, self.fail_on_commit = self.fail_on_commit, None
                    raise exc

                for ref, stock in txn.staged_stock.items():
                    self.products[ref]["stock"] = stock
                self.orders.update(txn.staged_orders)
                return result

        raise BackendUnavailableError()
