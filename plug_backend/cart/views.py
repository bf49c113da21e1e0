# cart/views.py

"""
CART API VIEWS

Purpose:
- Session-scoped cart for the storefront and the cashier screen.
- Every mutation goes through CartStore; SessionCart persists it.

Rules:
- Only visible + available products can be added.
- Price/name are snapshotted from the Product at add time (server-owned money).
"""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.serializers import AddCartItemInputSerializer, CartSerializer
from cart.session import SessionCart
from catalog.models import Product

logger = logging.getLogger(__name__)


class CartBaseView(APIView):
    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    def cart_response(self, cart: SessionCart, http_status=status.HTTP_200_OK):
        return Response(CartSerializer(cart.store).data, status=http_status)


class CartView(CartBaseView):
    @extend_schema(responses={200: CartSerializer}, description="View the session cart")
    def get(self, request):
        cart = SessionCart.for_request(request)
        return self.cart_response(cart)


class AddCartItemView(CartBaseView):
    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Add one unit of a product (increments the line if already present)",
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(
            Product,
            id=serializer.validated_data["product_id"],
            is_visible=True,
            is_available=True,
        )

        cart = SessionCart.for_request(request)
        line = cart.store.add_or_increment(product.to_snapshot())

        logger.info(
            "Cart line added",
            extra={"product_id": line.product_id, "quantity": line.quantity},
        )
        return self.cart_response(cart)


class DecreaseCartItemView(CartBaseView):
    @extend_schema(
        request=None,
        responses={200: CartSerializer},
        description="Decrease a line by one (removes it at quantity 1)",
    )
    def post(self, request, product_id):
        cart = SessionCart.for_request(request)
        cart.store.decrease_or_remove(str(product_id))
        return self.cart_response(cart)


class RemoveCartItemView(CartBaseView):
    @extend_schema(responses={200: CartSerializer}, description="Remove a line")
    def delete(self, request, product_id):
        cart = SessionCart.for_request(request)
        cart.store.remove(str(product_id))
        return self.cart_response(cart)


class ClearCartView(CartBaseView):
    @extend_schema(request=None, responses={200: CartSerializer}, description="Empty the cart")
    def post(self, request):
        cart = SessionCart.for_request(request)
        cart.store.clear()
        return self.cart_response(cart)
