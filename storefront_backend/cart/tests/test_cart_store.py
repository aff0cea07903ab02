"""
CART STORE TESTS

Run with:
    python manage.py test cart -v 2

GUARANTEES:
- Re-adding a product merges into one row (quantities summed)
- Quantity never drops below 1
- Another user's item behaves exactly like a missing one
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError
from django.test import TestCase

from cart.models import CartItem
from cart.services import cart_store
from cart.services.exceptions import (
    CartItemNotFoundError,
    InvalidProductError,
    InvalidQuantityError,
)

User = get_user_model()


class CartStoreTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="ada@example.com", password="secret123")
        self.other = User.objects.create_user(email="bob@example.com", password="secret123")

    # -----------------------------
    # upsert
    # -----------------------------

    def test_upsert_creates_row_with_delta(self):
        item = cart_store.upsert(user=self.user, product_id=5, quantity_delta=3)

        self.assertEqual(item.quantity, 3)
        self.assertEqual(item.product_id, 5)
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 1)

    def test_upsert_merges_same_product(self):
        first = cart_store.upsert(user=self.user, product_id=5)
        second = cart_store.upsert(user=self.user, product_id=5)

        self.assertEqual(first.id, second.id)
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 1)
        self.assertEqual(CartItem.objects.get(id=first.id).quantity, 2)

    def test_upsert_is_scoped_per_user(self):
        cart_store.upsert(user=self.user, product_id=5)
        cart_store.upsert(user=self.other, product_id=5)

        self.assertEqual(CartItem.objects.count(), 2)

    def test_upsert_rejects_bad_input(self):
        with self.assertRaises(InvalidQuantityError):
            cart_store.upsert(user=self.user, product_id=5, quantity_delta=0)
        with self.assertRaises(InvalidProductError):
            cart_store.upsert(user=self.user, product_id=None)

        self.assertFalse(CartItem.objects.exists())

    # -----------------------------
    # set_quantity / delete
    # -----------------------------

    def test_set_quantity_overwrites(self):
        item = cart_store.upsert(user=self.user, product_id=5)

        updated = cart_store.set_quantity(item_id=item.id, user=self.user, quantity=7)

        self.assertEqual(updated.quantity, 7)
        self.assertEqual(CartItem.objects.get(id=item.id).quantity, 7)

    def test_set_quantity_below_one_leaves_row_unchanged(self):
        item = cart_store.upsert(user=self.user, product_id=5, quantity_delta=2)

        with self.assertRaises(InvalidQuantityError):
            cart_store.set_quantity(item_id=item.id, user=self.user, quantity=0)

        self.assertEqual(CartItem.objects.get(id=item.id).quantity, 2)

    def test_set_quantity_on_foreign_item_is_not_found(self):
        item = cart_store.upsert(user=self.other, product_id=5)

        with self.assertRaises(CartItemNotFoundError):
            cart_store.set_quantity(item_id=item.id, user=self.user, quantity=3)

        self.assertEqual(CartItem.objects.get(id=item.id).quantity, 1)

    def test_delete(self):
        item = cart_store.upsert(user=self.user, product_id=5)

        self.assertTrue(cart_store.delete(item_id=item.id, user=self.user))
        self.assertFalse(cart_store.delete(item_id=item.id, user=self.user))

    def test_delete_foreign_item_returns_false(self):
        item = cart_store.upsert(user=self.other, product_id=5)

        self.assertFalse(cart_store.delete(item_id=item.id, user=self.user))
        self.assertTrue(CartItem.objects.filter(id=item.id).exists())

    # -----------------------------
    # reads
    # -----------------------------

    def test_count_is_number_of_rows(self):
        cart_store.upsert(user=self.user, product_id=5, quantity_delta=4)
        cart_store.upsert(user=self.user, product_id=6)

        self.assertEqual(cart_store.count_for_user(user=self.user), 2)
        self.assertEqual(cart_store.count_for_user(user=self.other), 0)

    def test_count_for_anonymous_is_zero(self):
        self.assertEqual(cart_store.count_for_user(user=AnonymousUser()), 0)
        self.assertEqual(cart_store.count_for_user(user=None), 0)

    def test_list_is_ordered_by_creation(self):
        a = cart_store.upsert(user=self.user, product_id=9)
        b = cart_store.upsert(user=self.user, product_id=1)

        ids = list(cart_store.list_for_user(user=self.user).values_list("id", flat=True))
        self.assertEqual(ids, [a.id, b.id])

    def test_model_validation_rejects_zero_quantity(self):
        with self.assertRaises(ValidationError):
            CartItem.objects.create(user=self.user, product_id=5, quantity=0)
