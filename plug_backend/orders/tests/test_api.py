# orders/tests/test_api.py

"""
CHECKOUT API TESTS

The cart is built through the cart API (same session), then checked out.
"""

from decimal import Decimal
from unittest import mock
from urllib.parse import unquote

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APIClient

from analytics import views as analytics_views
from backend.responses import error_response
from catalog.tests.helpers import make_product
from orders import views as order_views
from orders.models import Order
from orders.services.backends import InMemoryOrderBackend
from orders.services.placement import OrderPlacement

User = get_user_model()


class CheckoutApiTestBase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.cleo = make_product(category="smokes", name="Cleopatra", price="45.00", stock=4, display_order=1)
        self.chips = make_product(category="snack-attack", name="Chipsy", price="12.50", stock=1, display_order=1)

    def add(self, product, times=1):
        for _ in range(times):
            res = self.client.post("/api/cart/items/", {"product_id": str(product.pk)}, format="json")
            self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)

    def cart(self):
        return self.client.get("/api/cart/").data


class GuestCheckoutApiTests(CheckoutApiTestBase):
    def test_guest_checkout_returns_handoff_and_clears_cart(self):
        self.add(self.cleo, 2)
        self.add(self.chips)

        res = self.client.post("/api/orders/guest/", {"customer_name": "Ahmed"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        order = Order.objects.get(pk=res.data["order_id"])
        self.assertEqual(order.type, Order.Type.GUEST)
        self.assertEqual(order.total, Decimal("102.50"))

        handoff = res.data["handoff"]
        self.assertEqual(handoff["address"], "201019284462")
        self.assertIn("*Total: EGP 102.50*", handoff["message"])
        self.assertEqual(unquote(handoff["url"].split("?text=", 1)[1]), handoff["message"])

        self.assertEqual(self.cart()["items"], [])

    def test_empty_cart(self):
        res = self.client.post("/api/orders/guest/", {"customer_name": "Ahmed"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "EMPTY_CART")

    def test_blank_name_keeps_cart(self):
        self.add(self.cleo)

        res = self.client.post("/api/orders/guest/", {"customer_name": ""}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "CUSTOMER_NAME_REQUIRED")
        self.assertEqual(self.cart()["item_count"], 1)

    def test_backend_down_is_503_and_cart_survives(self):
        backend = InMemoryOrderBackend()
        backend.unavailable = True
        self.add(self.cleo)

        with mock.patch.object(
            order_views, "get_order_placement", return_value=OrderPlacement(backend)
        ):
            res = self.client.post("/api/orders/guest/", {"customer_name": "Ahmed"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(res.data["error"]["code"], "BACKEND_UNAVAILABLE")
        self.assertEqual(self.cart()["item_count"], 1)


class CounterCheckoutApiTests(CheckoutApiTestBase):
    def setUp(self):
        super().setUp()
        self.cashier = User.objects.create_user(
            email="mona@plug.test",
            password="pass",
            role="cashier",
            first_name="Mona",
            last_name="Hassan",
        )

    def test_anonymous_is_rejected(self):
        res = self.client.post("/api/orders/counter/", {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_counter_checkout_decrements_stock(self):
        self.client.force_authenticate(user=self.cashier)
        self.add(self.cleo, 3)

        res = self.client.post("/api/orders/counter/", {}, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["total"], "135.00")
        self.cleo.refresh_from_db()
        self.assertEqual(self.cleo.stock, 1)

        order = Order.objects.get(pk=res.data["order_id"])
        self.assertEqual(order.customer_name, "In-Store Customer")
        self.assertEqual(order.cashier_id, str(self.cashier.pk))
        self.assertEqual(order.cashier_name, "Mona Hassan")
        self.assertEqual(self.cart()["items"], [])

    def test_insufficient_stock_is_409_and_nothing_changes(self):
        self.client.force_authenticate(user=self.cashier)
        self.add(self.cleo)
        self.add(self.chips, 2)

        res = self.client.post("/api/orders/counter/", {"customer_name": "Sara"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "INSUFFICIENT_STOCK")
        self.assertIn("Chipsy", res.data["error"]["message"])
        self.cleo.refresh_from_db()
        self.assertEqual(self.cleo.stock, 4)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(self.cart()["item_count"], 3)

    def test_deleted_product_is_409(self):
        self.client.force_authenticate(user=self.cashier)
        self.add(self.cleo)
        self.cleo.delete()

        res = self.client.post("/api/orders/counter/", {}, format="json")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "PRODUCT_NOT_FOUND")


class OrderRecordsApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@plug.test", password="pass", role="admin")
        self.cashier = User.objects.create_user(email="c@plug.test", password="pass", role="cashier")
        Order.objects.create(customer_name="Ahmed", total=Decimal("10.00"), type=Order.Type.GUEST)
        Order.objects.create(
            customer_name="In-Store Customer",
            total=Decimal("20.00"),
            type=Order.Type.POINT_OF_SALE,
            cashier_id="u-1",
            cashier_name="Mona",
        )

    def test_cashier_cannot_read_orders(self):
        self.client.force_authenticate(user=self.cashier)
        res = self.client.get("/api/orders/")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_lists_records_filtered_by_type(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.get("/api/orders/", {"type": "point-of-sale"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 1)
        record = res.data["results"][0]
        self.assertEqual(record["customerName"], "In-Store Customer")
        self.assertEqual(record["cashierName"], "Mona")

    def test_record_money_is_a_json_number(self):
        self.client.force_authenticate(user=self.admin)

        res = self.client.get("/api/orders/", {"type": "point-of-sale"})

        record = res.json()["results"][0]
        self.assertIsInstance(record["total"], float)
        self.assertEqual(record["total"], 20.0)

    def test_guest_record_omits_cashier_fields(self):
        self.client.force_authenticate(user=self.admin)
        guest = Order.objects.get(type=Order.Type.GUEST)

        res = self.client.get(f"/api/orders/{guest.pk}/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertNotIn("cashierId", res.data)
        self.assertEqual(res.data["type"], "guest")


class ErrorEnvelopeTests(SimpleTestCase):
    def test_error_response_wraps_code_and_message(self):
        res = error_response(code="EMPTY_CART", message="Your cart is empty.", http_status=400)

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data, {"error": {"code": "EMPTY_CART", "message": "Your cart is empty."}})

    def test_checkout_and_dashboard_share_one_envelope(self):
        self.assertIs(order_views.error_response, error_response)
        self.assertIs(analytics_views.error_response, error_response)
