# catalog/views.py

"""
CATALOG VIEWS

Purpose:
- Public storefront catalog (AllowAny, read-only, visible products only).
- Admin product management (CRUD + low-stock alerts).
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import ListAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from catalog.models import Product
from catalog.serializers import (
    CategorySerializer,
    ProductSerializer,
    PublicProductSerializer,
)
from catalog.services.products import delete_product, low_stock_products, visible_products
from users.permissions import IsAdmin


class PublicCatalogView(ListAPIView):
    """
    GET /api/catalog/?category=<slug>
    """

    serializer_class = PublicProductSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "public_catalog"
    pagination_class = None

    def get_queryset(self):
        category = (self.request.query_params.get("category") or "").strip() or None
        if category and category not in Product.Category.values:
            raise serializers.ValidationError({"category": f"Unknown category '{category}'."})
        return visible_products(category=category)

    @extend_schema(
        tags=["Public"],
        parameters=[
            OpenApiParameter(
                name="category",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=list(Product.Category.values),
                description="Restrict to one category.",
            ),
        ],
        responses={
            200: OpenApiResponse(response=PublicProductSerializer(many=True)),
            400: OpenApiResponse(description="Unknown category"),
        },
        description="Visible products, by category then display order.",
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class CategoryListView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = CategorySerializer

    @extend_schema(tags=["Public"], responses={200: CategorySerializer(many=True)})
    def get(self, request):
        data = [{"key": key, "label": label} for key, label in Product.Category.choices]
        return Response(CategorySerializer(data, many=True).data, status=status.HTTP_200_OK)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Admin product management.

    - list/retrieve/create/update/delete
    - GET low-stock/ : products with 0 < stock <= LOW_STOCK_THRESHOLD
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_fields = ["category", "is_visible", "is_available"]
    queryset = Product.objects.all().order_by("category", "display_order")

    def perform_destroy(self, instance):
        delete_product(product=instance)

    @extend_schema(responses={200: ProductSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request):
        serializer = self.get_serializer(low_stock_products(), many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)
