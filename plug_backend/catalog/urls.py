# catalog/urls.py

"""
CATALOG URLS (/api/catalog/)

    ""              public catalog (AllowAny)
    categories/     category list (AllowAny)
    products/...    admin CRUD + products/low-stock/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from catalog.views import CategoryListView, ProductViewSet, PublicCatalogView

app_name = "catalog"

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("", PublicCatalogView.as_view(), name="public-catalog"),
    path("categories/", CategoryListView.as_view(), name="categories"),
    path("", include(router.urls)),
]
