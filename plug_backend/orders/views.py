# orders/views.py

"""
CHECKOUT + ORDER VIEWS

Purpose:
- POST /api/orders/guest/    storefront checkout (AllowAny) -> WhatsApp hand-off
- POST /api/orders/counter/  cashier checkout (cashier/admin) -> stock-checked order
- GET  /api/orders/          admin read-only order records (filter: ?type=)

Hard rules:
- The cart always comes from the caller's session; clients never send items.
- Placement errors are translated here, once, into {"error": {code, message}}.
"""

from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from backend.responses import error_response
from cart.session import SessionCart
from orders.models import Order
from orders.serializers import (
    CounterOrderInputSerializer,
    CounterOrderResponseSerializer,
    GuestOrderInputSerializer,
    GuestOrderResponseSerializer,
    OrderRecordSerializer,
)
from orders.services.backends import DjangoOrderBackend
from orders.services.exceptions import (
    BackendUnavailableError,
    CustomerNameRequiredError,
    EmptyCartError,
    InsufficientStockError,
    PlacementError,
    ProductNotFoundError,
)
from orders.services.placement import OrderPlacement
from orders.services.types import Operator
from users.permissions import IsAdmin, IsCashierOrAdmin

logger = logging.getLogger(__name__)


# =====================================================
# API ERROR NORMALIZATION
# =====================================================

ERROR_STATUS = {
    EmptyCartError: status.HTTP_400_BAD_REQUEST,
    CustomerNameRequiredError: status.HTTP_400_BAD_REQUEST,
    ProductNotFoundError: status.HTTP_409_CONFLICT,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    BackendUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def placement_error_response(exc: PlacementError):
    http_status = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return error_response(code=exc.code, message=exc.message, http_status=http_status)


def get_order_placement() -> OrderPlacement:
    return OrderPlacement(DjangoOrderBackend())


# =====================================================
# CHECKOUT
# =====================================================

class GuestOrderView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "public_write"

    @extend_schema(
        tags=["Public"],
        request=GuestOrderInputSerializer,
        responses={
            201: GuestOrderResponseSerializer,
            400: OpenApiResponse(description="EMPTY_CART / CUSTOMER_NAME_REQUIRED"),
            503: OpenApiResponse(description="BACKEND_UNAVAILABLE"),
        },
        description="Record a guest order from the session cart and return the WhatsApp hand-off.",
    )
    def post(self, request):
        serializer = GuestOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = SessionCart.for_request(request)
        try:
            handoff = async_to_sync(get_order_placement().place_guest_order)(
                cart.store,
                serializer.validated_data["customer_name"],
            )
        except PlacementError as exc:
            logger.info("Guest order rejected", extra={"code": exc.code})
            return placement_error_response(exc)
        finally:
            cart.close()

        return Response(
            {
                "order_id": handoff.order_id,
                "handoff": {
                    "address": handoff.address,
                    "message": handoff.message,
                    "url": handoff.url,
                },
            },
            status=status.HTTP_201_CREATED,
        )


class CounterOrderView(APIView):
    permission_classes = [IsAuthenticated, IsCashierOrAdmin]

    @extend_schema(
        request=CounterOrderInputSerializer,
        responses={
            201: CounterOrderResponseSerializer,
            400: OpenApiResponse(description="EMPTY_CART"),
            409: OpenApiResponse(description="PRODUCT_NOT_FOUND / INSUFFICIENT_STOCK"),
            503: OpenApiResponse(description="BACKEND_UNAVAILABLE"),
        },
        description="Complete an in-store sale from the session cart (stock-checked, atomic).",
    )
    def post(self, request):
        serializer = CounterOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = SessionCart.for_request(request)
        try:
            placed = async_to_sync(get_order_placement().place_counter_order)(
                cart.store,
                serializer.validated_data["customer_name"],
                Operator.from_user(request.user),
            )
        except PlacementError as exc:
            logger.info(
                "Point-of-sale order rejected",
                extra={"code": exc.code, "cashier_id": str(request.user.pk)},
            )
            return placement_error_response(exc)
        finally:
            cart.close()

        return Response(
            {"order_id": placed.order_id, "total": str(placed.total)},
            status=status.HTTP_201_CREATED,
        )


# =====================================================
# ORDER RECORDS (ADMIN)
# =====================================================

class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = OrderRecordSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_fields = ["type"]
    queryset = Order.objects.prefetch_related("items").order_by("-created_at")
