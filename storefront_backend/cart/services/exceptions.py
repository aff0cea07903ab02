# cart/services/exceptions.py

"""
CART STORE ERRORS

Centralized domain errors for the cart store service.
"""


class CartStoreError(Exception):
    """Base exception for all cart store failures."""


class CartItemNotFoundError(CartStoreError):
    """Item does not exist OR belongs to another user (never distinguished)."""


class InvalidQuantityError(CartStoreError):
    """Quantity (or quantity delta) below 1."""


class InvalidProductError(CartStoreError):
    """Missing or non-positive product id."""
