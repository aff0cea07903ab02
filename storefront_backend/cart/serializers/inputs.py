"""
PATH: cart/serializers/inputs.py

CART INPUT SERIALIZERS

Request validation only. Error messages are the ones the storefront shows.
"""

from rest_framework import serializers


class AddCartItemInputSerializer(serializers.Serializer):
    productId = serializers.IntegerField(
        min_value=1,
        error_messages={
            "required": "Product ID is required",
            "null": "Product ID is required",
            "invalid": "Product ID is required",
            "min_value": "Product ID is required",
        },
    )
    quantity = serializers.IntegerField(
        required=False,
        default=1,
        min_value=1,
        error_messages={
            "invalid": "Quantity must be at least 1",
            "min_value": "Quantity must be at least 1",
        },
    )


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(
        min_value=1,
        error_messages={
            "required": "Quantity must be at least 1",
            "null": "Quantity must be at least 1",
            "invalid": "Quantity must be at least 1",
            "min_value": "Quantity must be at least 1",
        },
    )
