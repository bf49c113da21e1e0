# catalog/apps.py

"""
CATALOG APP CONFIG

Products per category (the storefront's "collections"):
- public catalog (visible products, sorted by display order)
- admin product management
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
