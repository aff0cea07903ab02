"""
PATH: cart/urls.py

CART URLS

Base path (mounted in backend/urls.py):
    /api/cart/
"""

from django.urls import path

from cart.views import CartCountView, CartItemView, CartView

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("count/", CartCountView.as_view(), name="cart-count"),
    path("<int:item_id>/", CartItemView.as_view(), name="cart-item"),
]
