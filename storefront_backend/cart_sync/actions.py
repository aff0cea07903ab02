# cart_sync/actions.py

"""
CART MUTATION ACTIONS

Every mutation follows the same pattern:
1) optimistic signal on the channel (before the request)
2) the request
3) success -> Refresh
   failure -> inverse signal, then Refresh

Exception: a failed delete restores the list and emits the compensating
Increment only, without a Refresh.

Network failures and non-2xx responses are treated the same way.
Failures never propagate to the caller; actions return True/False.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from urllib.parse import quote

from cart_sync.api import StorefrontApiError
from cart_sync.channel import CartSyncChannel
from cart_sync.signals import Decrement, Increment, Refresh, signal_for_delta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginRedirect:
    destination: str

    @property
    def url(self) -> str:
        return f"/login?redirect={quote(self.destination, safe='/')}"


# =====================================================
# ADD TO CART (product pages)
# =====================================================


class CartActions:
    def __init__(self, api, channel: CartSyncChannel):
        self.api = api
        self.channel = channel
        self.pending: set[int] = set()

    def is_pending(self, product_id: int) -> bool:
        return product_id in self.pending

    def add_to_cart(self, product_id: int, quantity: int = 1):
        """
        The optimistic guess is always Increment(1): the badge counts rows,
        and one add changes the row count by at most one.
        """
        try:
            session = self.api.get_session()
        except StorefrontApiError as exc:
            logger.warning("Session check failed, product %s not added: %s", product_id, exc)
            return False
        if not session:
            return LoginRedirect(f"/products/{product_id}")

        guess = Increment(1)
        self.pending.add(product_id)
        self.channel.publish(guess)
        try:
            self.api.add_to_cart(product_id, quantity)
        except StorefrontApiError as exc:
            logger.info("Add to cart failed for product %s, rolling back: %s", product_id, exc)
            self.channel.publish(guess.inverse())
            self.channel.publish(Refresh())
            return False
        finally:
            self.pending.discard(product_id)

        self.channel.publish(Refresh())
        return True


# =====================================================
# CART PAGE
# =====================================================


class CartList:
    def __init__(self, api, channel: CartSyncChannel):
        self.api = api
        self.channel = channel
        self.items: list[dict] = []
        self.loading = True

    def load(self):
        try:
            if not self.api.get_session():
                return LoginRedirect("/cart")
            self.items = list(self.api.list_cart())
        except StorefrontApiError as exc:
            logger.warning("Failed to load cart: %s", exc)
            self.items = []
        finally:
            self.loading = False
        return self.items

    @property
    def total(self) -> float:
        total = 0.0
        for item in self.items:
            product = item.get("product") or {}
            total += float(product.get("price") or 0) * int(item.get("quantity") or 0)
        return round(total, 2)

    def _find(self, item_id: int) -> dict | None:
        for item in self.items:
            if item.get("id") == item_id:
                return item
        return None

    def update_quantity(self, item_id: int, new_quantity: int) -> bool:
        if new_quantity < 1:
            raise ValueError("Quantity must be at least 1")

        item = self._find(item_id)
        if item is None:
            return False

        snapshot = copy.deepcopy(self.items)
        guess = signal_for_delta(new_quantity - int(item.get("quantity") or 0))

        item["quantity"] = new_quantity
        if guess is not None:
            self.channel.publish(guess)

        ok = True
        try:
            self.api.update_cart_item(item_id, new_quantity)
        except StorefrontApiError as exc:
            logger.info("Quantity update failed for item %s, rolling back: %s", item_id, exc)
            ok = False
            self.items = snapshot
            if guess is not None:
                self.channel.publish(guess.inverse())

        self.channel.publish(Refresh())
        return ok

    def delete(self, item_id: int) -> bool:
        item = self._find(item_id)
        if item is None:
            return False

        snapshot = copy.deepcopy(self.items)
        removed = int(item.get("quantity") or 0)

        self.items = [i for i in self.items if i.get("id") != item_id]
        if removed > 0:
            self.channel.publish(Decrement(removed))

        try:
            self.api.delete_cart_item(item_id)
        except StorefrontApiError as exc:
            logger.info("Delete failed for item %s, rolling back: %s", item_id, exc)
            self.items = snapshot
            if removed > 0:
                self.channel.publish(Increment(removed))
            # TODO: confirm whether this path should also publish Refresh like the others
            return False

        self.channel.publish(Refresh())
        return True


def sign_out(api, badge) -> None:
    try:
        api.sign_out()
    except StorefrontApiError as exc:
        logger.warning("Sign out request failed: %s", exc)
    finally:
        badge.reset()
