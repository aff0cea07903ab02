from .api import CartCountView, CartItemView, CartView

__all__ = [
    "CartView",
    "CartItemView",
    "CartCountView",
]
