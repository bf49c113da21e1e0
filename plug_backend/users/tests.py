# users/tests.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from orders.services.types import Operator

User = get_user_model()


class UserModelTests(TestCase):
    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="pass")

    def test_default_role_is_cashier(self):
        user = User.objects.create_user(email="Mona@Plug.test", password="pass")
        self.assertEqual(user.role, User.ROLE_CASHIER)
        self.assertTrue(user.check_password("pass"))

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(email="root@plug.test", password="pass")
        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)

    def test_display_name_falls_back_to_email(self):
        user = User.objects.create_user(email="c@plug.test", password="pass")
        self.assertEqual(user.display_name, "c@plug.test")

    def test_operator_from_user(self):
        user = User.objects.create_user(
            email="c@plug.test", password="pass", first_name="Mona", last_name="Hassan"
        )
        operator = Operator.from_user(user)
        self.assertEqual(operator, Operator(id=str(user.pk), display_name="Mona Hassan"))


class AuthApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="c@plug.test", password="pass", role="cashier")

    def test_jwt_login_then_me(self):
        res = self.client.post(
            "/api/auth/jwt/create/",
            {"email": "c@plug.test", "password": "pass"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        me = self.client.get("/api/auth/me/")

        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["email"], "c@plug.test")
        self.assertEqual(me.data["role"], "cashier")

    def test_me_requires_auth(self):
        res = self.client.get("/api/auth/me/")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
