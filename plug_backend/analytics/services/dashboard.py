# analytics/services/dashboard.py

"""
ADMIN DASHBOARD

Rules:
- total_revenue counts point-of-sale orders only; guest orders are unconfirmed
  WhatsApp requests and never count as revenue.
- total_orders / avg_order_value include every order in range
  (avg = revenue / all orders).
- most_ordered: top 5 products by summed quantity across all order types.
- low_stock ignores the range: 0 < stock <= LOW_STOCK_THRESHOLD.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, DecimalField, Max, Q, Sum
from django.db.models.functions import Coalesce

from analytics.services.ranges import resolve_range
from catalog.services.products import low_stock_products
from orders.models import Order, OrderItem

TWOPLACES = Decimal("0.01")
TOP_PRODUCTS = 5
RECENT_ORDERS = 10


def _money(x) -> str:
    return str(Decimal(str(x or 0)).quantize(TWOPLACES, rounding=ROUND_HALF_UP))


def _orders_in_range(start, end):
    qs = Order.objects.filter(created_at__lte=end)
    if start is not None:
        qs = qs.filter(created_at__gte=start)
    return qs


def build_dashboard(range_filter: str, now=None) -> dict:
    start, end = resolve_range(range_filter, now)
    orders = _orders_in_range(start, end)

    totals = orders.aggregate(
        total_orders=Count("id"),
        guest_orders=Count("id", filter=Q(type=Order.Type.GUEST)),
        counter_orders=Count("id", filter=Q(type=Order.Type.POINT_OF_SALE)),
        total_revenue=Coalesce(
            Sum("total", filter=Q(type=Order.Type.POINT_OF_SALE)),
            Decimal("0"),
            output_field=DecimalField(max_digits=12, decimal_places=2),
        ),
    )

    total_orders = totals["total_orders"] or 0
    revenue = Decimal(str(totals["total_revenue"] or 0))
    avg = revenue / total_orders if total_orders else Decimal("0")

    most_ordered = (
        OrderItem.objects.filter(order__in=orders)
        .values("product_id")
        .annotate(name=Max("name"), quantity=Sum("quantity"))
        .order_by("-quantity", "name")[:TOP_PRODUCTS]
    )

    recent = orders.prefetch_related("items").order_by("-created_at")

    return {
        "range": range_filter,
        "start": start.isoformat() if start else None,
        "end": end.isoformat(),
        "total_revenue": _money(revenue),
        "total_orders": total_orders,
        "avg_order_value": _money(avg),
        "guest_orders": totals["guest_orders"] or 0,
        "counter_orders": totals["counter_orders"] or 0,
        "most_ordered": [
            {"product_id": row["product_id"], "name": row["name"], "quantity": row["quantity"]}
            for row in most_ordered
        ],
        "low_stock": [
            {"id": str(p.pk), "category": p.category, "name": p.name, "stock": p.stock}
            for p in low_stock_products()
        ],
        "recent_counter_orders": [
            {"id": str(o.pk), **o.to_record()}
            for o in recent.filter(type=Order.Type.POINT_OF_SALE)[:RECENT_ORDERS]
        ],
        "recent_guest_orders": [
            {"id": str(o.pk), **o.to_record()}
            for o in recent.filter(type=Order.Type.GUEST)[:RECENT_ORDERS]
        ],
    }
