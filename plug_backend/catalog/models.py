# catalog/models.py

"""
PRODUCT MODEL

Rules:
- A product lives in exactly one category; (category, id) locates its stock record.
- display_order is unique within a category and only drives catalog sorting.
- stock is a plain integer counter, mutated at the cashier checkout only
  (inside the atomic order transaction) or by an admin edit.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from cart.store import ProductRef, ProductSnapshot


class Product(models.Model):
    class Category(models.TextChoices):
        SMOKES = "smokes", "Smokes"
        SNACK_ATTACK = "snack-attack", "Snack Attack"
        CANDY_BOOM = "candy-boom", "Candy Boom"
        SUPER_NUTS = "super-nuts", "Super Nuts"
        VIBE_SAVE = "vibe-save", "Vibe Save"
        GAME_ON = "game-on", "Game On"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.CharField(max_length=32, choices=Category.choices, db_index=True)

    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(max_length=500, blank=True)

    is_available = models.BooleanField(default=True)
    is_visible = models.BooleanField(default=True)

    display_order = models.PositiveIntegerField(
        help_text="Catalog sort key, unique within the category (shown as 'Order ID' in the admin)."
    )
    stock = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "display_order"]
        constraints = [
            models.UniqueConstraint(
                fields=["category", "display_order"],
                name="unique_display_order_per_category",
            )
        ]
        indexes = [
            models.Index(fields=["category", "is_visible"], name="catalog_category_visible_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.category} #{self.display_order})"

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError({"price": "Price must be non-negative"})

    @property
    def ref(self) -> ProductRef:
        return ProductRef(category_key=self.category, product_id=str(self.pk))

    def to_snapshot(self) -> ProductSnapshot:
        """
        The immutable view of this product that the cart stores.
        """
        return ProductSnapshot(
            ref=self.ref,
            name=self.name,
            price=Decimal(self.price),
            image_url=self.image_url or "",
        )
