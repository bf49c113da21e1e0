# orders/services/handoff.py

"""
GUEST ORDER HAND-OFF

Builds the WhatsApp message a guest sends to the store after their order is
recorded. Pure string building; nothing here does I/O.

Amounts: integral values print without decimals ("30"), others with two ("12.50").
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable
from urllib.parse import quote

from cart.store import CartLineItem
from orders.services.types import HandOff

WHATSAPP_BASE_URL = "https://wa.me/"

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "!~*'()"


def format_amount(amount) -> str:
    value = Decimal(amount)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return str(value.quantize(Decimal("0.01")))


def build_order_summary(lines: Iterable[CartLineItem], currency: str) -> str:
    return "\n".join(
        f"- {line.name} (x{line.quantity}) - {currency} {format_amount(line.line_total)}"
        for line in lines
    )


def build_guest_message(
    *,
    store_name: str,
    customer_name: str,
    summary: str,
    total,
    currency: str,
) -> str:
    return (
        f"Hello {store_name}! I'd like to place an order:\n"
        "\n"
        "*Customer Details:*\n"
        f"Name: {customer_name}\n"
        "\n"
        "*Order Summary:*\n"
        f"{summary}\n"
        "\n"
        f"*Total: {currency} {format_amount(total)}*\n"
        "\n"
        "Thank you!"
    )


def normalize_address(number: str) -> str:
    # wa.me wants the bare international number: no "+", spaces or dashes.
    return "".join(ch for ch in (number or "") if ch.isdigit())


def build_handoff(*, address: str, message: str, order_id: str = "") -> HandOff:
    address = normalize_address(address)
    url = f"{WHATSAPP_BASE_URL}{address}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
    return HandOff(address=address, message=message, url=url, order_id=order_id)
