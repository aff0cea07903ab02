# cart_sync/badge.py

"""
CART BADGE

Owns the displayed cart count. Only apply() writes it.

Reducer:
- Increment(m) -> count += m
- Decrement(m) -> count = max(0, count - m)
- Refresh      -> re-read GET /api/cart/count/ and overwrite
"""

from __future__ import annotations

import logging

from cart_sync.api import StorefrontApiError
from cart_sync.channel import CartSyncChannel, Subscription
from cart_sync.signals import CartSyncSignal, Decrement, Increment

logger = logging.getLogger(__name__)


class CartBadge:
    def __init__(self, api):
        self.api = api
        self.count = 0
        self._subscription: Subscription | None = None

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    def mount(self, channel: CartSyncChannel) -> None:
        if self._subscription is not None:
            self.unmount()
        self._subscription = channel.subscribe(self.apply)
        self.refresh()

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def apply(self, signal: CartSyncSignal) -> None:
        if isinstance(signal, Increment):
            self.count += signal.magnitude
        elif isinstance(signal, Decrement):
            self.count = max(0, self.count - signal.magnitude)
        else:
            self.refresh()

    def refresh(self) -> int:
        try:
            self.count = max(0, int(self.api.cart_count()))
        except StorefrontApiError as exc:
            logger.warning("Cart count refresh failed, keeping %s: %s", self.count, exc)
        return self.count

    def reset(self) -> None:
        self.count = 0
