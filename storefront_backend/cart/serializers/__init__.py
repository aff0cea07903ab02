from .cart_item import CartItemSerializer, CartLineSerializer
from .inputs import AddCartItemInputSerializer, UpdateCartItemInputSerializer

__all__ = [
    "CartItemSerializer",
    "CartLineSerializer",
    "AddCartItemInputSerializer",
    "UpdateCartItemInputSerializer",
]
