# catalog/services/exceptions.py

"""
CATALOG SERVICE ERRORS

Serializers/views translate these into DRF validation errors.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog management failures."""


class ProductValidationError(CatalogError):
    def __init__(self, errors: dict):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


class DisplayOrderTakenError(CatalogError):
    def __init__(self, display_order: int):
        self.display_order = display_order
        super().__init__(f"Order ID {display_order} is already in use.")
