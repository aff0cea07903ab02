# cart_sync/api.py

"""
STOREFRONT API CLIENT

Thin client over the storefront HTTP surface used by the cart actions
and the badge.

Transport:
    transport(method, url, *, headers, body) -> (status, text)
Default transport is urllib. Tests inject their own callable.

Errors:
- ApiTransportError : network failure (no response)
- ApiResponseError  : non-2xx response (status + decoded payload)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

Transport = Callable[..., "tuple[int, str]"]


# =====================================================
# ERRORS
# =====================================================


class StorefrontApiError(Exception):
    pass


class ApiTransportError(StorefrontApiError):
    pass


class ApiResponseError(StorefrontApiError):
    def __init__(self, status: int, payload: Any = None):
        self.status = status
        self.payload = payload
        message = ""
        if isinstance(payload, dict):
            message = str(payload.get("error") or "")
        super().__init__(f"HTTP {status} {message}".strip())


# =====================================================
# TRANSPORT
# =====================================================


class UrllibTransport:
    def __init__(self, timeout: int = 10):
        self.timeout = timeout

    def __call__(self, method: str, url: str, *, headers=None, body=None):
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")

        req = Request(url, data=data, headers=headers or {}, method=method)
        try:
            with urlopen(req, timeout=self.timeout) as resp:
                return resp.status, resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            try:
                raw = e.read().decode("utf-8", errors="replace")
            except OSError:
                raw = ""
            return e.code, raw
        except URLError as e:
            raise ApiTransportError(f"Storefront URLError: {e.reason}") from e
        except OSError as e:
            raise ApiTransportError(f"Storefront request failed: {e}") from e


def _decode(raw: str) -> Any:
    if not (raw or "").strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return {"error": raw.strip()}


# =====================================================
# CLIENT
# =====================================================


class StorefrontApi:
    def __init__(self, base_url: str, token: str | None = None, transport: Transport | None = None):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token
        self.refresh_token: str | None = None
        self.transport = transport or UrllibTransport()

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def _request(self, method: str, path: str, body: dict | None = None) -> Any:
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            status, raw = self.transport(
                method, f"{self.base_url}{path}", headers=headers, body=body
            )
        except StorefrontApiError:
            raise
        except OSError as exc:
            raise ApiTransportError(str(exc)) from exc

        payload = _decode(raw)
        if not 200 <= int(status) < 300:
            raise ApiResponseError(int(status), payload)
        return payload

    # ----- session -----

    def login(self, *, email: str, password: str) -> dict:
        payload = self._request("POST", "/api/auth/login/", {"email": email, "password": password})
        self.token = payload.get("access")
        self.refresh_token = payload.get("refresh")
        return payload.get("user") or {}

    def get_session(self) -> dict | None:
        """The signed-in user, or None when there is no valid session."""
        if not self.token:
            return None
        try:
            return self._request("GET", "/api/auth/me/")
        except ApiResponseError as exc:
            if exc.status == 401:
                return None
            raise

    def sign_out(self) -> None:
        try:
            if self.token and self.refresh_token:
                self._request("POST", "/api/auth/logout/", {"refresh": self.refresh_token})
        finally:
            self.token = None
            self.refresh_token = None

    # ----- cart -----

    def cart_count(self) -> int:
        payload = self._request("GET", "/api/cart/count/") or {}
        return int(payload.get("count") or 0)

    def list_cart(self) -> list[dict]:
        return self._request("GET", "/api/cart/") or []

    def add_to_cart(self, product_id: int, quantity: int = 1) -> dict:
        return self._request("POST", "/api/cart/", {"productId": product_id, "quantity": quantity})

    def update_cart_item(self, item_id: int, quantity: int) -> dict:
        return self._request("PUT", f"/api/cart/{item_id}/", {"quantity": quantity})

    def delete_cart_item(self, item_id: int) -> dict:
        return self._request("DELETE", f"/api/cart/{item_id}/")
