"""
PATH: cart/serializers/cart_item.py

CART ITEM SERIALIZERS

Purpose:
- Serialize cart rows in the storefront's camelCase wire shape.
- Everything is read-only; writes go through the input serializers + cart store.
"""

from rest_framework import serializers

from cart.models import CartItem
from catalog.serializers import ProductSerializer


class CartItemSerializer(serializers.ModelSerializer):
    """
    Mutation responses (POST /cart/, PUT /cart/<id>/).
    """

    userId = serializers.UUIDField(source="user_id", read_only=True)
    productId = serializers.IntegerField(source="product_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "userId",
            "productId",
            "quantity",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class CartLineSerializer(serializers.Serializer):
    """
    GET /cart/ rows: the item plus the upstream product (null when unavailable).
    """

    id = serializers.IntegerField()
    productId = serializers.IntegerField()
    quantity = serializers.IntegerField()
    product = ProductSerializer(allow_null=True)
