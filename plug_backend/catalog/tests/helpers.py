# catalog/tests/helpers.py

from decimal import Decimal

from catalog.models import Product


def make_product(
    *,
    category: str = Product.Category.SMOKES,
    name: str = "Cleopatra Red",
    price: str = "45.00",
    stock: int = 10,
    display_order: int = 1,
    is_visible: bool = True,
    is_available: bool = True,
) -> Product:
    return Product.objects.create(
        category=category,
        name=name,
        price=Decimal(price),
        stock=stock,
        display_order=display_order,
        image_url=f"https://cdn.example.com/{category}/{display_order}.png",
        is_visible=is_visible,
        is_available=is_available,
    )
