# catalog/tests/test_api.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from catalog.models import Product
from catalog.tests.helpers import make_product

User = get_user_model()


class PublicCatalogApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        make_product(category="smokes", name="Visible", display_order=1)
        make_product(category="smokes", name="Hidden", display_order=2, is_visible=False)
        make_product(category="candy-boom", name="Mentos", display_order=1)

    def test_anonymous_can_browse_visible_products(self):
        res = self.client.get("/api/catalog/", {"category": "smokes"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([p["name"] for p in res.data], ["Visible"])
        self.assertNotIn("stock", res.data[0])

    def test_unknown_category_is_400(self):
        res = self.client.get("/api/catalog/", {"category": "bakery"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_categories_list(self):
        res = self.client.get("/api/catalog/categories/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), len(Product.Category.choices))
        self.assertEqual(res.data[0], {"key": "smokes", "label": "Smokes"})


class AdminProductApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@plug.test", password="pass", role="admin")
        self.cashier = User.objects.create_user(email="cashier@plug.test", password="pass", role="cashier")

    def _payload(self, **overrides):
        data = {
            "category": "vibe-save",
            "name": "Red Bull",
            "price": "60.00",
            "stock": 24,
            "image_url": "https://cdn.example.com/redbull.png",
        }
        data.update(overrides)
        return data

    def test_cashier_cannot_manage_products(self):
        self.client.force_authenticate(user=self.cashier)
        res = self.client.post("/api/catalog/products/", self._payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_create_allocates_display_order(self):
        self.client.force_authenticate(user=self.admin)

        first = self.client.post("/api/catalog/products/", self._payload(), format="json")
        second = self.client.post("/api/catalog/products/", self._payload(name="Monster"), format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(first.data["display_order"], 1)
        self.assertEqual(second.data["display_order"], 2)

    def test_admin_create_with_taken_order_is_400(self):
        self.client.force_authenticate(user=self.admin)
        self.client.post("/api/catalog/products/", self._payload(display_order=3), format="json")

        res = self.client.post(
            "/api/catalog/products/", self._payload(name="Monster", display_order=3), format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(res.data["display_order"][0]), "Order ID 3 is already in use.")

    def test_admin_create_requires_image(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.post("/api/catalog/products/", self._payload(image_url=""), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("image_url", res.data)

    def test_admin_partial_update_and_category_is_fixed(self):
        product = make_product(category="vibe-save", display_order=1)
        self.client.force_authenticate(user=self.admin)

        ok = self.client.patch(f"/api/catalog/products/{product.pk}/", {"stock": 3}, format="json")
        moved = self.client.patch(
            f"/api/catalog/products/{product.pk}/", {"category": "smokes"}, format="json"
        )

        self.assertEqual(ok.status_code, status.HTTP_200_OK)
        self.assertTrue(ok.data["is_low_stock"])
        self.assertEqual(moved.status_code, status.HTTP_400_BAD_REQUEST)

    def test_low_stock_action(self):
        make_product(name="Low", stock=2, display_order=1)
        make_product(name="Fine", stock=50, display_order=2)
        self.client.force_authenticate(user=self.admin)

        res = self.client.get("/api/catalog/products/low-stock/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([p["name"] for p in res.data], ["Low"])

    def test_admin_delete(self):
        product = make_product()
        self.client.force_authenticate(user=self.admin)
        res = self.client.delete(f"/api/catalog/products/{product.pk}/")
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(pk=product.pk).exists())
