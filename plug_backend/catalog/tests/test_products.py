# catalog/tests/test_products.py

"""
PRODUCT SERVICE TESTS

GUARANTEES:
- display_order is unique per category ("Order ID N is already in use.")
- Omitted display_order allocates max + 1 (1 for an empty category)
- Validation mirrors the admin product form
"""

from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import TestCase

from catalog.models import Product
from catalog.services.exceptions import DisplayOrderTakenError, ProductValidationError
from catalog.services.products import (
    create_product,
    delete_product,
    low_stock_products,
    update_product,
    visible_products,
)
from catalog.tests.helpers import make_product


def _create(**overrides):
    data = {
        "category": "snack-attack",
        "name": "Chipsy Salt",
        "price": "15.00",
        "stock": 12,
        "image_url": "https://cdn.example.com/chipsy.png",
    }
    data.update(overrides)
    return create_product(**data)


class DisplayOrderAllocationTests(TestCase):
    def test_first_product_in_category_gets_one(self):
        product = _create()
        self.assertEqual(product.display_order, 1)

    def test_omitted_display_order_is_max_plus_one(self):
        _create(display_order=4)
        product = _create(name="Chipsy Cheese")
        self.assertEqual(product.display_order, 5)

    def test_allocation_is_per_category(self):
        _create(display_order=7)
        other = _create(category="candy-boom", name="Mentos")
        self.assertEqual(other.display_order, 1)

    def test_explicit_duplicate_is_rejected(self):
        _create(display_order=3)
        with self.assertRaises(DisplayOrderTakenError) as ctx:
            _create(name="Doritos", display_order=3)

        self.assertEqual(str(ctx.exception), "Order ID 3 is already in use.")
        self.assertEqual(Product.objects.filter(category="snack-attack").count(), 1)

    def test_database_constraint_backs_the_check(self):
        make_product(category="super-nuts", display_order=2)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                make_product(category="super-nuts", name="Other", display_order=2)

    def test_update_to_taken_order_is_rejected(self):
        first = _create(display_order=1)
        second = _create(name="Doritos", display_order=2)

        with self.assertRaises(DisplayOrderTakenError):
            update_product(product=second, display_order=first.display_order)

        second.refresh_from_db()
        self.assertEqual(second.display_order, 2)

    def test_update_keeping_own_order_is_allowed(self):
        product = _create(display_order=2)
        updated = update_product(product=product, display_order=2, name="Chipsy XL")
        self.assertEqual(updated.display_order, 2)
        self.assertEqual(updated.name, "Chipsy XL")

    def test_update_clearing_order_reallocates(self):
        _create(display_order=6)
        product = _create(name="Doritos", display_order=2)

        updated = update_product(product=product, display_order=None)

        self.assertEqual(updated.display_order, 7)


class ProductValidationTests(TestCase):
    def test_invalid_fields_are_reported_together(self):
        with self.assertRaises(ProductValidationError) as ctx:
            _create(name="  ", price="0", stock="2.5", image_url="", display_order=0)

        self.assertEqual(
            set(ctx.exception.errors),
            {"name", "price", "stock", "image_url", "display_order"},
        )

    def test_negative_stock_is_rejected(self):
        with self.assertRaises(ProductValidationError) as ctx:
            _create(stock=-1)
        self.assertIn("stock", ctx.exception.errors)

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(ProductValidationError) as ctx:
            _create(category="bakery")
        self.assertIn("category", ctx.exception.errors)

    def test_price_is_quantized(self):
        product = _create(price="12.5")
        self.assertEqual(product.price, Decimal("12.50"))

    def test_update_does_not_require_image(self):
        product = _create()
        updated = update_product(product=product, price="20", image_url="")
        self.assertEqual(updated.image_url, "https://cdn.example.com/chipsy.png")
        self.assertEqual(updated.price, Decimal("20.00"))


class ProductQueryTests(TestCase):
    def test_visible_products_sorted_by_category_then_order(self):
        make_product(category="smokes", name="B", display_order=2)
        make_product(category="smokes", name="A", display_order=1)
        make_product(category="smokes", name="Hidden", display_order=3, is_visible=False)
        make_product(category="game-on", name="Cards", display_order=1)

        names = [p.name for p in visible_products(category="smokes")]
        self.assertEqual(names, ["A", "B"])
        self.assertEqual(visible_products().count(), 3)

    def test_low_stock_excludes_sold_out_and_healthy(self):
        make_product(name="Sold out", stock=0, display_order=1)
        make_product(name="Low", stock=5, display_order=2)
        make_product(name="Very low", stock=1, display_order=3)
        make_product(name="Healthy", stock=6, display_order=4)

        names = [p.name for p in low_stock_products()]
        self.assertEqual(names, ["Very low", "Low"])

    def test_delete_product(self):
        product = make_product()
        delete_product(product=product)
        self.assertFalse(Product.objects.filter(pk=product.pk).exists())
