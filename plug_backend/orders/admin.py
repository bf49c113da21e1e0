# orders/admin.py

"""
Orders are immutable: the admin is read-only (no add / change / delete).
"""

from django.contrib import admin

from orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    fields = ("name", "product_id", "price", "quantity")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "type", "customer_name", "total", "cashier_name", "created_at")
    list_filter = ("type",)
    search_fields = ("customer_name", "cashier_name")
    date_hierarchy = "created_at"
    inlines = [OrderItemInline]
    readonly_fields = (
        "id",
        "type",
        "customer_name",
        "total",
        "cashier_id",
        "cashier_name",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
