# analytics/tests/test_dashboard.py

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from analytics.services.dashboard import build_dashboard
from catalog.tests.helpers import make_product
from orders.models import Order, OrderItem

User = get_user_model()


def _order(order_type, total, items, created_at=None):
    order = Order.objects.create(
        customer_name="Customer",
        total=Decimal(total),
        type=order_type,
        created_at=created_at or timezone.now(),
    )
    for product_id, name, quantity in items:
        OrderItem.objects.create(
            order=order,
            product_id=product_id,
            name=name,
            price=Decimal("1.00"),
            quantity=quantity,
        )
    return order


class DashboardServiceTests(TestCase):
    def setUp(self):
        _order(Order.Type.POINT_OF_SALE, "100.00", [("p1", "Cleopatra", 3), ("p2", "Chipsy", 1)])
        _order(Order.Type.POINT_OF_SALE, "50.00", [("p2", "Chipsy", 4)])
        _order(Order.Type.GUEST, "999.00", [("p3", "Mentos", 2)])
        _order(
            Order.Type.POINT_OF_SALE,
            "70.00",
            [("p1", "Cleopatra", 10)],
            created_at=timezone.now() - timedelta(days=800),
        )

    def test_revenue_excludes_guest_orders(self):
        data = build_dashboard("today")

        self.assertEqual(data["total_revenue"], "150.00")
        self.assertEqual(data["total_orders"], 3)
        self.assertEqual(data["avg_order_value"], "50.00")
        self.assertEqual(data["guest_orders"], 1)
        self.assertEqual(data["counter_orders"], 2)

    def test_most_ordered_in_range(self):
        data = build_dashboard("today")

        self.assertEqual(
            [(row["name"], row["quantity"]) for row in data["most_ordered"]],
            [("Chipsy", 5), ("Cleopatra", 3), ("Mentos", 2)],
        )

    def test_all_time_includes_old_orders(self):
        data = build_dashboard("all")

        self.assertEqual(data["total_orders"], 4)
        self.assertEqual(data["total_revenue"], "220.00")
        self.assertEqual(data["most_ordered"][0]["name"], "Cleopatra")
        self.assertIsNone(data["start"])

    def test_low_stock_alerts(self):
        make_product(name="Almost gone", stock=2, display_order=1)
        make_product(name="Sold out", stock=0, display_order=2)

        data = build_dashboard("today")

        self.assertEqual([p["name"] for p in data["low_stock"]], ["Almost gone"])


class EmptyDashboardTests(TestCase):
    def test_empty_range_has_zero_average(self):
        data = build_dashboard("week")
        self.assertEqual(data["avg_order_value"], "0.00")
        self.assertEqual(data["most_ordered"], [])


class DashboardApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@plug.test", password="pass", role="admin")
        self.cashier = User.objects.create_user(email="c@plug.test", password="pass", role="cashier")

    def test_admin_only(self):
        self.client.force_authenticate(user=self.cashier)
        res = self.client.get("/api/analytics/dashboard/")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_dashboard(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.get("/api/analytics/dashboard/", {"range": "month"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["range"], "month")

    def test_invalid_range(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.get("/api/analytics/dashboard/", {"range": "decade"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "INVALID_RANGE")
