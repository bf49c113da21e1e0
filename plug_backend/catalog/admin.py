# catalog/admin.py

"""
Admin rules:
- The admin form validates the (category, display_order) constraint itself;
  API writes go through catalog.services.products.
"""

from django.contrib import admin

from catalog.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "display_order",
        "price",
        "stock",
        "is_available",
        "is_visible",
    )
    list_filter = ("category", "is_available", "is_visible")
    search_fields = ("name",)
    ordering = ("category", "display_order")
    readonly_fields = ("id", "created_at", "updated_at")
