# orders/models.py

"""
ORDER RECORDS (IMMUTABLE)

Order + OrderItem are append-only snapshots written by the order placement
protocol (guest or point-of-sale). Item name/price are captured at placement
time; product_id is an opaque reference (products may be deleted later).

Rules:
- An order is never edited or deleted once created.
- total is computed at placement time and stored, never re-derived.
- cashier_id / cashier_name are set for point-of-sale orders only.
"""

from __future__ import annotations

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Order(models.Model):
    class Type(models.TextChoices):
        GUEST = "guest", "Guest (online)"
        POINT_OF_SALE = "point-of-sale", "Point of sale"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer_name = models.CharField(max_length=255)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    type = models.CharField(max_length=20, choices=Type.choices, db_index=True)

    cashier_id = models.CharField(max_length=64, blank=True, default="")
    cashier_name = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["type", "created_at"], name="orders_type_created_idx"),
        ]

    def __str__(self):
        return f"{self.get_type_display()} order {self.id} ({self.customer_name})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Order records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Order records cannot be deleted")

    def to_record(self) -> dict:
        """
        Persisted/wire shape of an order (camelCase, cashier fields only for
        point-of-sale orders). Money values are JSON numbers.
        """
        record = {
            "customerName": self.customer_name,
            "items": [
                {
                    "productId": item.product_id,
                    "name": item.name,
                    "price": float(item.price),
                    "quantity": item.quantity,
                }
                for item in self.items.all()
            ],
            "total": float(self.total),
            "createdAt": self.created_at.isoformat(),
            "type": self.type,
        }
        if self.type == self.Type.POINT_OF_SALE:
            record["cashierId"] = self.cashier_id
            record["cashierName"] = self.cashier_name
        return record


class OrderItem(models.Model):
    id = models.BigAutoField(primary_key=True)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")

    product_id = models.CharField(max_length=64, db_index=True)
    category_key = models.CharField(max_length=32, blank=True, default="")
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()

    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return f"{self.name} x {self.quantity}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("OrderItem records are immutable")
        super().save(*args, **kwargs)
