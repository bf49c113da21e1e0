# orders/tests/test_models.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from orders.models import Order, OrderItem


def _order(**overrides):
    data = {
        "customer_name": "Ahmed",
        "total": Decimal("90.00"),
        "type": Order.Type.GUEST,
    }
    data.update(overrides)
    order = Order.objects.create(**data)
    OrderItem.objects.create(
        order=order,
        product_id="p-1",
        category_key="smokes",
        name="Cleopatra",
        price=Decimal("45.00"),
        quantity=2,
    )
    return order


class OrderImmutabilityTests(TestCase):
    def test_order_cannot_be_edited(self):
        order = _order()
        order.customer_name = "Someone else"
        with self.assertRaises(ValidationError):
            order.save()

    def test_order_cannot_be_deleted(self):
        order = _order()
        with self.assertRaises(ValidationError):
            order.delete()
        self.assertTrue(Order.objects.filter(pk=order.pk).exists())

    def test_order_item_cannot_be_edited(self):
        item = _order().items.get()
        item.quantity = 5
        with self.assertRaises(ValidationError):
            item.save()


class OrderRecordTests(TestCase):
    def test_guest_record_has_no_cashier_fields(self):
        record = _order().to_record()

        self.assertEqual(record["customerName"], "Ahmed")
        self.assertEqual(record["type"], "guest")
        self.assertEqual(record["total"], 90.0)
        self.assertEqual(
            record["items"],
            [{"productId": "p-1", "name": "Cleopatra", "price": 45.0, "quantity": 2}],
        )
        self.assertIn("createdAt", record)
        self.assertNotIn("cashierId", record)

    def test_point_of_sale_record_carries_cashier(self):
        record = _order(
            type=Order.Type.POINT_OF_SALE,
            cashier_id="u-1",
            cashier_name="Mona",
        ).to_record()

        self.assertEqual(record["type"], "point-of-sale")
        self.assertEqual(record["cashierId"], "u-1")
        self.assertEqual(record["cashierName"], "Mona")
