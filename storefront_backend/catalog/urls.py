# catalog/urls.py
"""
CATALOG API URLS (PUBLIC)

Base path (mounted in backend/urls.py):
    /api/

- GET /api/products/?category=<name>
- GET /api/products/<id>/
- GET /api/categories/
"""

from __future__ import annotations

from django.urls import path

from catalog.views import CategoryListView, ProductDetailView, ProductListView

app_name = "catalog"

urlpatterns = [
    path("products/", ProductListView.as_view(), name="product-list"),
    path("products/<int:product_id>/", ProductDetailView.as_view(), name="product-detail"),
    path("categories/", CategoryListView.as_view(), name="category-list"),
]
