# cart/urls.py

from django.urls import path

from cart.views import (
    AddCartItemView,
    CartView,
    ClearCartView,
    DecreaseCartItemView,
    RemoveCartItemView,
)

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", AddCartItemView.as_view(), name="cart-add-item"),
    path("items/<str:product_id>/decrease/", DecreaseCartItemView.as_view(), name="cart-decrease-item"),
    path("items/<str:product_id>/", RemoveCartItemView.as_view(), name="cart-remove-item"),
    path("clear/", ClearCartView.as_view(), name="cart-clear"),
]
