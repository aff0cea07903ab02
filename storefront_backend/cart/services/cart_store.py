# cart/services/cart_store.py

"""
CART STORE (APPLICATION SERVICE)

Purpose:
- The only writer of CartItem rows.
- Every operation is scoped by the owning user. Someone else's item id
  behaves exactly like a missing one.

Operations:
- list_for_user(user)                        -> QuerySet[CartItem]
- upsert(user, product_id, quantity_delta)   -> CartItem   (merge on re-add)
- set_quantity(item_id, user, quantity)      -> CartItem   (raises CartItemNotFoundError)
- delete(item_id, user)                      -> bool
- count_for_user(user)                       -> int        (number of rows)
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from cart.models import CartItem
from cart.services.exceptions import (
    CartItemNotFoundError,
    InvalidProductError,
    InvalidQuantityError,
)

logger = logging.getLogger(__name__)


def _require_quantity(value) -> int:
    try:
        qty = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidQuantityError("Quantity must be at least 1") from exc
    if qty < 1:
        raise InvalidQuantityError("Quantity must be at least 1")
    return qty


def _require_product_id(value) -> int:
    try:
        pid = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidProductError("Product ID is required") from exc
    if pid < 1:
        raise InvalidProductError("Product ID is required")
    return pid


def list_for_user(*, user):
    return CartItem.objects.filter(user=user).order_by("created_at", "id")


def count_for_user(*, user) -> int:
    if user is None or not getattr(user, "is_authenticated", False):
        return 0
    return CartItem.objects.filter(user=user).count()


@transaction.atomic
def upsert(*, user, product_id, quantity_delta=1) -> CartItem:
    """
    Add quantity_delta of product_id to the user's cart.

    - Existing row: locked, quantity summed.
    - No row: created with quantity = quantity_delta.
    - Two first-adds racing: the loser hits the unique constraint and merges.
    """
    pid = _require_product_id(product_id)
    qty = _require_quantity(quantity_delta)

    item = (
        CartItem.objects.select_for_update()
        .filter(user=user, product_id=pid)
        .first()
    )

    if item is None:
        try:
            with transaction.atomic():
                item = CartItem.objects.create(user=user, product_id=pid, quantity=qty)
            logger.info("Cart item created", extra={"product_id": pid, "quantity": qty})
            return item
        except IntegrityError:
            item = CartItem.objects.select_for_update().get(user=user, product_id=pid)

    item.quantity = int(item.quantity) + qty
    item.save(update_fields=["quantity", "updated_at"])
    logger.info("Cart item merged", extra={"product_id": pid, "quantity": item.quantity})
    return item


@transaction.atomic
def set_quantity(*, item_id, user, quantity) -> CartItem:
    qty = _require_quantity(quantity)

    item = (
        CartItem.objects.select_for_update()
        .filter(id=item_id, user=user)
        .first()
    )
    if item is None:
        raise CartItemNotFoundError("Cart item not found")

    item.quantity = qty
    item.save(update_fields=["quantity", "updated_at"])
    return item


@transaction.atomic
def delete(*, item_id, user) -> bool:
    deleted, _ = CartItem.objects.filter(id=item_id, user=user).delete()
    return deleted > 0
