# catalog/apps.py

"""
CATALOG APP CONFIG

Public product browsing backed by an upstream demo product API:
- Product list (optionally by category)
- Product detail
- Category list

The upstream is read-only and owned by a third party; nothing is persisted.
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Product Catalog"
