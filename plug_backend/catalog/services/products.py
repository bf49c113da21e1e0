# catalog/services/products.py

"""
PRODUCT MANAGEMENT SERVICE

Purpose:
- Single write path for admin product create/update/delete.
- Allocate display_order ("Order ID") safely within a category.

Rules:
- name required; price > 0; stock is a non-negative integer.
- image_url required on create (blob upload happens outside this service).
- Explicit display_order must be positive and unused in the category.
- Omitted display_order -> max(category) + 1 (1 for an empty category).
- Allocation runs inside one transaction with the category's rows locked;
  the (category, display_order) unique constraint is the last line of defence
  and its IntegrityError is reported as DisplayOrderTakenError.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Max

from catalog.models import Product
from catalog.services.exceptions import DisplayOrderTakenError, ProductValidationError

logger = logging.getLogger(__name__)

UNSET = object()


# -----------------------------
# Validation helpers
# -----------------------------
def _clean_name(value, errors: dict) -> str:
    name = (value or "").strip() if isinstance(value, str) else ""
    if not name:
        errors["name"] = "Product name is required."
    return name


def _clean_price(value, errors: dict):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        price = None
    if price is None or not price.is_finite() or price <= 0:
        errors["price"] = "A valid positive price is required."
        return None
    return price.quantize(Decimal("0.01"))


def _clean_stock(value, errors: dict):
    # bool is an int subclass
    if isinstance(value, bool) or value is None or value == "":
        errors["stock"] = "Stock must be a non-negative integer."
        return None
    try:
        as_decimal = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        as_decimal = None
    if as_decimal is None or not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value() or as_decimal < 0:
        errors["stock"] = "Stock must be a non-negative integer."
        return None
    return int(as_decimal)


def _clean_display_order(value, errors: dict):
    """
    None/"" means "allocate for me".
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        errors["display_order"] = "Order ID must be a positive number."
        return None
    try:
        order = int(value)
    except (TypeError, ValueError):
        errors["display_order"] = "Order ID must be a positive number."
        return None
    if order < 1:
        errors["display_order"] = "Order ID must be a positive number."
        return None
    return order


def _clean_category(value, errors: dict):
    if value not in Product.Category.values:
        errors["category"] = "Unknown category."
        return None
    return value


# -----------------------------
# Display order allocation
# -----------------------------
def _lock_category(category: str) -> None:
    # Serializes allocators of the same category (no-op locking on SQLite).
    list(Product.objects.select_for_update().filter(category=category).values_list("pk", flat=True))


def _next_display_order(category: str) -> int:
    current = Product.objects.filter(category=category).aggregate(m=Max("display_order"))["m"]
    return (current or 0) + 1


def _ensure_display_order_free(*, category: str, display_order: int, exclude_pk=None) -> None:
    qs = Product.objects.filter(category=category, display_order=display_order)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise DisplayOrderTakenError(display_order)


def _save(product: Product, *, display_order: int) -> None:
    try:
        with transaction.atomic():
            product.save()
    except IntegrityError as exc:
        raise DisplayOrderTakenError(display_order) from exc


# -----------------------------
# Public API
# -----------------------------
@transaction.atomic
def create_product(
    *,
    category,
    name,
    price,
    stock,
    image_url="",
    display_order=None,
    is_available: bool = True,
    is_visible: bool = True,
) -> Product:
    errors: dict = {}
    category = _clean_category(category, errors)
    name = _clean_name(name, errors)
    price = _clean_price(price, errors)
    stock = _clean_stock(stock, errors)
    display_order = _clean_display_order(display_order, errors)
    image_url = (image_url or "").strip()
    if not image_url:
        errors["image_url"] = "An image is required for new products."
    if errors:
        raise ProductValidationError(errors)

    _lock_category(category)

    if display_order is None:
        display_order = _next_display_order(category)
    else:
        _ensure_display_order_free(category=category, display_order=display_order)

    product = Product(
        category=category,
        name=name,
        price=price,
        stock=stock,
        image_url=image_url,
        display_order=display_order,
        is_available=bool(is_available),
        is_visible=bool(is_visible),
    )
    _save(product, display_order=display_order)

    logger.info(
        "Product created",
        extra={"product_id": str(product.pk), "category": category, "display_order": display_order},
    )
    return product


@transaction.atomic
def update_product(*, product: Product, **changes) -> Product:
    """
    Partial update. Passing display_order=None (or "") re-allocates max + 1,
    omitting it keeps the current value.
    """
    locked = Product.objects.select_for_update().get(pk=product.pk)
    errors: dict = {}

    if "name" in changes:
        locked.name = _clean_name(changes["name"], errors)
    if "price" in changes:
        locked.price = _clean_price(changes["price"], errors)
    if "stock" in changes:
        locked.stock = _clean_stock(changes["stock"], errors)
    if "image_url" in changes and changes["image_url"]:
        locked.image_url = str(changes["image_url"]).strip()
    if "is_available" in changes:
        locked.is_available = bool(changes["is_available"])
    if "is_visible" in changes:
        locked.is_visible = bool(changes["is_visible"])

    requested_order = changes.get("display_order", UNSET)
    if requested_order is not UNSET:
        requested_order = _clean_display_order(requested_order, errors)

    if errors:
        raise ProductValidationError(errors)

    if requested_order is not UNSET:
        _lock_category(locked.category)
        if requested_order is None:
            locked.display_order = _next_display_order(locked.category)
        elif requested_order != locked.display_order:
            _ensure_display_order_free(
                category=locked.category,
                display_order=requested_order,
                exclude_pk=locked.pk,
            )
            locked.display_order = requested_order

    _save(locked, display_order=locked.display_order)

    logger.info("Product updated", extra={"product_id": str(locked.pk), "fields": sorted(changes)})
    return locked


def delete_product(*, product: Product) -> None:
    product_id = str(product.pk)
    product.delete()
    logger.info("Product deleted", extra={"product_id": product_id})


# -----------------------------
# Queries
# -----------------------------
def visible_products(*, category: str | None = None):
    """
    Storefront catalog: visible products by category, then display_order.
    """
    qs = Product.objects.filter(is_visible=True)
    if category:
        qs = qs.filter(category=category)
    return qs.order_by("category", "display_order")


def low_stock_products(*, threshold: int | None = None):
    """
    Products that are running out but not yet sold out: 0 < stock <= threshold.
    """
    if threshold is None:
        threshold = settings.STOREFRONT["LOW_STOCK_THRESHOLD"]
    return Product.objects.filter(stock__gt=0, stock__lte=threshold).order_by("stock", "name")
