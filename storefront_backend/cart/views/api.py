# cart/views/api.py

"""
CART API VIEWS

Endpoints (mounted under /api/cart/):
- GET    /            list the shopper's items (+ upstream product)
- POST   /            add a product (merges into an existing row)
- PUT    /<id>/       set quantity (>= 1)
- DELETE /<id>/       remove an item
- GET    /count/      number of rows; optional auth, never fails

Hard rules:
- Every row access is scoped by request.user. Foreign ids are 404, not 403.
- Validation errors -> 400, missing session -> 401 {"error": "Unauthorized"}.
- Unexpected failures are caught here and returned as 500 {"error": ...}.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exceptions import error_response
from cart.filters import CartItemFilter
from cart.serializers import (
    AddCartItemInputSerializer,
    CartItemSerializer,
    CartLineSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services import cart_store
from cart.services.exceptions import CartItemNotFoundError
from catalog.services import fakestore
from users.authentication import OptionalJWTAuthentication

logger = logging.getLogger(__name__)


# =====================================================
# HELPERS
# =====================================================


def _cart_lines(items) -> list[dict]:
    lines = []
    for item in items:
        product = fakestore.get_product(item.product_id)
        lines.append(
            {
                "id": item.id,
                "productId": item.product_id,
                "quantity": item.quantity,
                "product": product.to_dict() if product else None,
            }
        )
    return lines


def _filtered_items(request):
    filterset = CartItemFilter(
        request.query_params,
        queryset=cart_store.list_for_user(user=request.user),
    )
    if not filterset.is_valid():
        return None, filterset.errors
    return filterset.qs, None


# =====================================================
# CART API VIEWS
# =====================================================


class CartView(APIView):
    """
    List or add to the authenticated shopper's cart.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartItemSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="productId",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only return the row for this product.",
            ),
        ],
        responses={
            200: CartLineSerializer(many=True),
            401: OpenApiResponse(description="Unauthorized"),
        },
        description="List cart items with upstream product details (product is null when unavailable)",
    )
    def get(self, request):
        items, errors = _filtered_items(request)
        if errors:
            return error_response(
                message="Invalid filter",
                http_status=status.HTTP_400_BAD_REQUEST,
                details=errors,
            )

        try:
            lines = _cart_lines(items)
        except Exception:
            logger.exception("Failed to fetch cart")
            return error_response(
                message="Failed to fetch cart",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(CartLineSerializer(lines, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={
            200: CartItemSerializer,
            400: OpenApiResponse(description="Product ID is required / bad quantity"),
            401: OpenApiResponse(description="Unauthorized"),
        },
        description="Add a product to the cart (increments quantity if already present)",
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = cart_store.upsert(
                user=request.user,
                product_id=serializer.validated_data["productId"],
                quantity_delta=serializer.validated_data["quantity"],
            )
        except Exception:
            logger.exception("Failed to add to cart")
            return error_response(
                message="Failed to add to cart",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(CartItemSerializer(item).data, status=status.HTTP_200_OK)


class CartItemView(APIView):
    """
    Update quantity of / remove one of the shopper's cart items.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartItemSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={
            200: CartItemSerializer,
            400: OpenApiResponse(description="Quantity must be at least 1"),
            401: OpenApiResponse(description="Unauthorized"),
            404: OpenApiResponse(description="Cart item not found"),
        },
        description="Set the quantity of a cart item",
    )
    def put(self, request, item_id: int):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = cart_store.set_quantity(
                item_id=item_id,
                user=request.user,
                quantity=serializer.validated_data["quantity"],
            )
        except CartItemNotFoundError:
            return error_response(
                message="Cart item not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        except Exception:
            logger.exception("Failed to update cart item %s", item_id)
            return error_response(
                message="Failed to update cart item",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(CartItemSerializer(item).data, status=status.HTTP_200_OK)

    @extend_schema(
        responses={
            200: {"type": "object", "properties": {"success": {"type": "boolean"}}},
            401: OpenApiResponse(description="Unauthorized"),
            404: OpenApiResponse(description="Cart item not found"),
        },
        description="Remove an item from the cart",
    )
    def delete(self, request, item_id: int):
        try:
            deleted = cart_store.delete(item_id=item_id, user=request.user)
        except Exception:
            logger.exception("Failed to delete cart item %s", item_id)
            return error_response(
                message="Failed to delete cart item",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if not deleted:
            return error_response(
                message="Cart item not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return Response({"success": True}, status=status.HTTP_200_OK)


class CartCountView(APIView):
    """
    Badge count. Session optional: anonymous, bad tokens and internal
    errors all answer {"count": 0}.
    """

    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(
        responses={200: {"type": "object", "properties": {"count": {"type": "integer"}}}},
        description="Number of items in the shopper's cart (0 when signed out)",
    )
    def get(self, request):
        try:
            count = cart_store.count_for_user(user=request.user)
        except Exception:
            logger.exception("Failed to count cart items")
            count = 0

        return Response({"count": count}, status=status.HTTP_200_OK)
