# orders/serializers.py

from __future__ import annotations

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderItemRecordSerializer(serializers.ModelSerializer):
    productId = serializers.CharField(source="product_id", read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["productId", "name", "price", "quantity"]
        read_only_fields = fields


class OrderRecordSerializer(serializers.ModelSerializer):
    """
    Order in its persisted record shape (camelCase). cashierId / cashierName
    only appear on point-of-sale orders.
    """

    customerName = serializers.CharField(source="customer_name", read_only=True)
    items = OrderItemRecordSerializer(many=True, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    cashierId = serializers.CharField(source="cashier_id", read_only=True)
    cashierName = serializers.CharField(source="cashier_name", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customerName",
            "items",
            "total",
            "createdAt",
            "type",
            "cashierId",
            "cashierName",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.type != Order.Type.POINT_OF_SALE:
            data.pop("cashierId", None)
            data.pop("cashierName", None)
        return data


# -----------------------------
# Checkout input / output (Swagger)
# -----------------------------
class GuestOrderInputSerializer(serializers.Serializer):
    customer_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class CounterOrderInputSerializer(serializers.Serializer):
    customer_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class HandOffSerializer(serializers.Serializer):
    address = serializers.CharField()
    message = serializers.CharField()
    url = serializers.CharField()


class GuestOrderResponseSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    handoff = HandOffSerializer()


class CounterOrderResponseSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
