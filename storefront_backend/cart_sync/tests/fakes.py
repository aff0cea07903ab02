"""
In-memory stand-ins for StorefrontApi used by the cart_sync tests.
"""

from __future__ import annotations

from cart_sync.api import ApiResponseError, ApiTransportError


class FakeStorefrontApi:
    """
    Holds server truth (rows) and records every call.
    Set fail_next = "network" | <status int> to fail the next mutation.
    """

    def __init__(self, *, signed_in=True):
        self.signed_in = signed_in
        self.rows: dict[int, dict] = {}
        self.calls: list[tuple] = []
        self.fail_next = None
        self.count_error = None
        self.session_error = None
        self._next_id = 1

    def _maybe_fail(self):
        failure, self.fail_next = self.fail_next, None
        if failure == "network":
            raise ApiTransportError("connection refused")
        if failure is not None:
            raise ApiResponseError(failure, {"error": "nope"})

    def seed(self, product_id, quantity=1, price=10.0):
        item_id = self._next_id
        self._next_id += 1
        self.rows[item_id] = {
            "id": item_id,
            "productId": product_id,
            "quantity": quantity,
            "product": {"id": product_id, "title": f"P{product_id}", "price": price},
        }
        return item_id

    # ----- session -----

    def get_session(self):
        self.calls.append(("get_session",))
        if self.session_error is not None:
            raise self.session_error
        return {"email": "ada@example.com"} if self.signed_in else None

    def sign_out(self):
        self.calls.append(("sign_out",))
        self.signed_in = False

    # ----- cart -----

    def cart_count(self):
        self.calls.append(("cart_count",))
        if self.count_error is not None:
            raise self.count_error
        return len(self.rows) if self.signed_in else 0

    def list_cart(self):
        self.calls.append(("list_cart",))
        return [dict(r) for r in self.rows.values()]

    def add_to_cart(self, product_id, quantity=1):
        self.calls.append(("add_to_cart", product_id, quantity))
        self._maybe_fail()
        for row in self.rows.values():
            if row["productId"] == product_id:
                row["quantity"] += quantity
                return row
        return self.rows[self.seed(product_id, quantity)]

    def update_cart_item(self, item_id, quantity):
        self.calls.append(("update_cart_item", item_id, quantity))
        self._maybe_fail()
        self.rows[item_id]["quantity"] = quantity
        return self.rows[item_id]

    def delete_cart_item(self, item_id):
        self.calls.append(("delete_cart_item", item_id))
        self._maybe_fail()
        del self.rows[item_id]
        return {"success": True}


class Recorder:
    """Channel subscriber that keeps every signal it sees."""

    def __init__(self):
        self.seen = []

    def __call__(self, signal):
        self.seen.append(signal)
