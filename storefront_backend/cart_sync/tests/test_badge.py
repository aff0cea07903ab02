import random

from django.test import SimpleTestCase

from cart_sync.api import ApiTransportError
from cart_sync.badge import CartBadge
from cart_sync.channel import CartSyncChannel
from cart_sync.signals import Decrement, Increment, Refresh

from .fakes import FakeStorefrontApi


class CartBadgeTests(SimpleTestCase):
    def setUp(self):
        self.api = FakeStorefrontApi()
        self.channel = CartSyncChannel()
        self.badge = CartBadge(self.api)

    def test_mount_loads_initial_count(self):
        self.api.seed(1)
        self.api.seed(2)

        self.badge.mount(self.channel)

        self.assertEqual(self.badge.count, 2)
        self.assertTrue(self.badge.mounted)

    def test_mount_signed_out_is_zero(self):
        self.api.signed_in = False
        self.api.seed(1)

        self.badge.mount(self.channel)

        self.assertEqual(self.badge.count, 0)

    def test_reducer(self):
        self.badge.mount(self.channel)

        self.channel.publish(Increment(3))
        self.assertEqual(self.badge.count, 3)

        self.channel.publish(Decrement(1))
        self.assertEqual(self.badge.count, 2)

    def test_decrement_floors_at_zero(self):
        self.badge.mount(self.channel)
        self.channel.publish(Increment(1))

        self.channel.publish(Decrement(5))

        self.assertEqual(self.badge.count, 0)

    def test_refresh_overrides_guesses(self):
        self.badge.mount(self.channel)
        self.api.seed(7)

        rng = random.Random(1234)
        for _ in range(50):
            signal = Increment(rng.randint(1, 5)) if rng.random() < 0.5 else Decrement(rng.randint(1, 5))
            self.channel.publish(signal)
            self.assertGreaterEqual(self.badge.count, 0)

        self.channel.publish(Refresh())

        self.assertEqual(self.badge.count, 1)

    def test_failed_refresh_keeps_value(self):
        self.badge.mount(self.channel)
        self.channel.publish(Increment(2))
        self.api.count_error = ApiTransportError("offline")

        with self.assertLogs("cart_sync.badge", level="WARNING"):
            self.channel.publish(Refresh())

        self.assertEqual(self.badge.count, 2)

    def test_unmount_stops_updates(self):
        self.badge.mount(self.channel)
        self.badge.unmount()

        self.channel.publish(Increment(4))

        self.assertEqual(self.badge.count, 0)
        self.assertFalse(self.badge.mounted)
        self.assertEqual(self.channel.subscriber_count, 0)

    def test_remount_does_not_double_subscribe(self):
        self.badge.mount(self.channel)
        self.badge.mount(self.channel)

        self.channel.publish(Increment(1))

        self.assertEqual(self.badge.count, 1)

    def test_reset(self):
        self.badge.mount(self.channel)
        self.channel.publish(Increment(3))

        self.badge.reset()

        self.assertEqual(self.badge.count, 0)
