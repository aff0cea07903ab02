# cart/apps.py

"""
CART APP CONFIG

Per-user shopping cart:
- One row per (user, product); re-adding a product merges quantities
- Rows are owned by a user; other users' rows are invisible (404, not 403)
"""

from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
    verbose_name = "Shopping Cart"
