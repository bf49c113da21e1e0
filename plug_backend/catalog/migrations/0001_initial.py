# catalog/migrations/0001_initial.py

from __future__ import annotations

import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("smokes", "Smokes"),
                            ("snack-attack", "Snack Attack"),
                            ("candy-boom", "Candy Boom"),
                            ("super-nuts", "Super Nuts"),
                            ("vibe-save", "Vibe Save"),
                            ("game-on", "Game On"),
                        ],
                        db_index=True,
                        max_length=32,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("is_available", models.BooleanField(default=True)),
                ("is_visible", models.BooleanField(default=True)),
                (
                    "display_order",
                    models.PositiveIntegerField(
                        help_text="Catalog sort key, unique within the category (shown as 'Order ID' in the admin)."
                    ),
                ),
                ("stock", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["category", "display_order"],
                "indexes": [
                    models.Index(
                        fields=["category", "is_visible"],
                        name="catalog_category_visible_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("category", "display_order"),
                        name="unique_display_order_per_category",
                    )
                ],
            },
        ),
    ]
