# orders/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from orders.views import CounterOrderView, GuestOrderView, OrderViewSet

app_name = "orders"

router = SimpleRouter()
router.register(r"", OrderViewSet, basename="orders")

urlpatterns = [
    path("guest/", GuestOrderView.as_view(), name="guest-order"),
    path("counter/", CounterOrderView.as_view(), name="counter-order"),
    path("", include(router.urls)),
]
