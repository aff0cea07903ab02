# cart_sync/channel.py

"""
CART SYNC CHANNEL

Explicit replacement for a process-wide "cartUpdated" event:
one channel instance is injected into both the actions and the badge.

Delivery:
- synchronous, FIFO
- non-reentrant: publishing from inside a handler queues the signal
  until the current one has reached every subscriber
- a failing handler is logged; the others still receive the signal
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable

from cart_sync.signals import CartSyncSignal

logger = logging.getLogger(__name__)

Handler = Callable[[CartSyncSignal], None]


class Subscription:
    def __init__(self, channel: "CartSyncChannel", handler: Handler):
        self._channel = channel
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._channel._remove(self)
            self.active = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.unsubscribe()
        return False


class CartSyncChannel:
    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._queue: deque[CartSyncSignal] = deque()
        self._dispatching = False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, handler: Handler) -> Subscription:
        sub = Subscription(self, handler)
        self._subscriptions.append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        try:
            self._subscriptions.remove(sub)
        except ValueError:
            pass

    def publish(self, signal: CartSyncSignal) -> None:
        self._queue.append(signal)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                current = self._queue.popleft()
                for sub in list(self._subscriptions):
                    if not sub.active:
                        continue
                    try:
                        sub.handler(current)
                    except Exception:
                        logger.exception("Cart sync handler failed for %r", current)
        finally:
            self._dispatching = False
