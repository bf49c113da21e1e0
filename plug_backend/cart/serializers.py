# cart/serializers.py

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

CENTS = Decimal("0.01")


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    category_key = serializers.CharField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    image_url = serializers.CharField(allow_blank=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartSerializer(serializers.Serializer):
    """
    Serializes a CartStore (not a model).
    """

    items = serializers.SerializerMethodField()
    total = serializers.SerializerMethodField()
    item_count = serializers.SerializerMethodField()

    def get_items(self, store):
        return CartLineSerializer(store.lines, many=True).data

    def get_total(self, store) -> str:
        return str(store.total().quantize(CENTS))

    def get_item_count(self, store) -> int:
        return store.item_count()


class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
