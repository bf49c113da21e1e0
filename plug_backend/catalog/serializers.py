# catalog/serializers.py

"""
CATALOG SERIALIZERS

- ProductSerializer: admin CRUD. Writes go through catalog.services.products
  (display_order allocation + validation live there, not here).
- PublicProductSerializer: storefront read model (no stock numbers leak).
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from catalog.models import Product
from catalog.services.exceptions import (
    CatalogError,
    DisplayOrderTakenError,
    ProductValidationError,
)
from catalog.services.products import create_product, update_product


def _as_validation_error(exc: CatalogError) -> serializers.ValidationError:
    if isinstance(exc, ProductValidationError):
        return serializers.ValidationError({field: [msg] for field, msg in exc.errors.items()})
    if isinstance(exc, DisplayOrderTakenError):
        return serializers.ValidationError({"display_order": [str(exc)]})
    return serializers.ValidationError({"detail": [str(exc)]})


class ProductSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "category",
            "name",
            "price",
            "image_url",
            "is_available",
            "is_visible",
            "display_order",
            "stock",
            "is_low_stock",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "is_low_stock", "created_at", "updated_at"]
        extra_kwargs = {
            "display_order": {"required": False, "allow_null": True},
            "image_url": {"required": False},
            "stock": {"required": True},
        }
        # (category, display_order) uniqueness is enforced by the service.
        validators = []

    def get_is_low_stock(self, obj) -> bool:
        return 0 < int(obj.stock or 0) <= settings.STOREFRONT["LOW_STOCK_THRESHOLD"]

    def create(self, validated_data):
        try:
            return create_product(**validated_data)
        except CatalogError as exc:
            raise _as_validation_error(exc) from exc

    def update(self, instance, validated_data):
        category = validated_data.pop("category", instance.category)
        if category != instance.category:
            raise serializers.ValidationError({"category": "Category cannot be changed."})
        try:
            return update_product(product=instance, **validated_data)
        except CatalogError as exc:
            raise _as_validation_error(exc) from exc


class PublicProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "category",
            "name",
            "price",
            "image_url",
            "is_available",
            "display_order",
        ]
        read_only_fields = fields


class CategorySerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
