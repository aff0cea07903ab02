# cart/filters.py

"""
CART FILTERS (django-filter)

GET /api/cart/?productId=<int>
"""

from __future__ import annotations

import django_filters

from cart.models import CartItem


class CartItemFilter(django_filters.FilterSet):
    productId = django_filters.NumberFilter(field_name="product_id")

    class Meta:
        model = CartItem
        fields = ["productId"]
