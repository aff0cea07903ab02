"""
CATALOG TESTS

Run with:
    python manage.py test catalog -v 2

The upstream is never contacted: urlopen is patched in the client module.
"""

from __future__ import annotations

import io
import json
from http.client import IncompleteRead
from unittest import mock
from urllib.error import HTTPError, URLError

from django.core.cache import cache
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from catalog.services import fakestore
from catalog.services.exceptions import (
    ProductNotFoundError,
    UpstreamFormatError,
    UpstreamUnavailableError,
)

PRODUCT = {
    "id": 1,
    "title": "Backpack",
    "price": 109.95,
    "description": "Fits 15 inch laptops",
    "category": "men's clothing",
    "image": "https://fakestoreapi.com/img/1.jpg",
    "rating": {"rate": 3.9, "count": 120},
}


class _FakeResponse(io.BytesIO):
    status = 200

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def _ok(payload) -> _FakeResponse:
    if isinstance(payload, (bytes, str)):
        raw = payload.encode("utf-8") if isinstance(payload, str) else payload
    else:
        raw = json.dumps(payload).encode("utf-8")
    return _FakeResponse(raw)


def _http_error(code: int, reason: str = "Error") -> HTTPError:
    return HTTPError("http://catalog.invalid", code, reason, {}, io.BytesIO(b""))


def _patch_urlopen(**kwargs):
    return mock.patch("catalog.services.fakestore.urlopen", **kwargs)


# =====================================================
# CLIENT
# =====================================================


class FakestoreClientTests(TestCase):
    def setUp(self):
        cache.clear()

    def test_fetch_products_parses_and_caches(self):
        with _patch_urlopen(return_value=_ok([PRODUCT])) as urlopen:
            first = fakestore.fetch_products()
            second = fakestore.fetch_products("all")

        self.assertEqual(urlopen.call_count, 1)
        self.assertEqual(first, second)
        self.assertEqual(first[0].title, "Backpack")
        self.assertEqual(first[0].rating.count, 120)

    def test_category_path_is_used(self):
        with _patch_urlopen(return_value=_ok([PRODUCT])) as urlopen:
            fakestore.fetch_products("men's clothing")

        req = urlopen.call_args[0][0]
        self.assertEqual(
            req.full_url, "http://catalog.invalid/products/category/men%27s%20clothing"
        )

    def test_non_array_is_format_error(self):
        with _patch_urlopen(return_value=_ok({"message": "nope"})):
            with self.assertRaises(UpstreamFormatError):
                fakestore.fetch_products()

    def test_non_json_is_format_error(self):
        with _patch_urlopen(return_value=_ok("<html>down</html>")):
            with self.assertRaises(UpstreamFormatError):
                fakestore.fetch_categories()

    def test_invalid_item_is_format_error(self):
        with _patch_urlopen(return_value=_ok([{"id": 1}])):
            with self.assertRaises(UpstreamFormatError):
                fakestore.fetch_products()

    def test_http_error_carries_status(self):
        with _patch_urlopen(side_effect=_http_error(503, "Service Unavailable")):
            with self.assertRaises(UpstreamUnavailableError) as ctx:
                fakestore.fetch_products()

        self.assertEqual(ctx.exception.status, 503)
        self.assertEqual(ctx.exception.status_text, "Service Unavailable")

    def test_failures_are_not_cached(self):
        with _patch_urlopen(side_effect=URLError("timeout")):
            with self.assertRaises(UpstreamUnavailableError):
                fakestore.fetch_categories()

        with _patch_urlopen(return_value=_ok(["electronics", "jewelery"])):
            self.assertEqual(fakestore.fetch_categories(), ["electronics", "jewelery"])

    def test_unknown_product_empty_body(self):
        with _patch_urlopen(return_value=_ok(b"")):
            with self.assertRaises(ProductNotFoundError):
                fakestore.fetch_product(999)

    def test_unknown_product_404(self):
        with _patch_urlopen(side_effect=_http_error(404, "Not Found")):
            with self.assertRaises(ProductNotFoundError):
                fakestore.fetch_product(999)

    def test_lenient_wrappers_degrade(self):
        with _patch_urlopen(side_effect=URLError("down")):
            self.assertEqual(fakestore.list_products(), [])
            self.assertEqual(fakestore.list_categories(), [])
            self.assertIsNone(fakestore.get_product(1))

    def test_truncated_body_is_unavailable(self):
        with _patch_urlopen(side_effect=IncompleteRead(b"[")):
            with self.assertRaises(UpstreamUnavailableError):
                fakestore.fetch_products()

        with _patch_urlopen(side_effect=IncompleteRead(b"[")):
            self.assertEqual(fakestore.list_products(), [])
            self.assertIsNone(fakestore.get_product(1))

    @override_settings(CATALOG={"BASE_URL": "not a url", "TIMEOUT": 1, "CACHE_TTL": 60})
    def test_malformed_base_url_degrades(self):
        with self.assertRaises(UpstreamUnavailableError):
            fakestore.fetch_categories()

        self.assertEqual(fakestore.list_categories(), [])
        self.assertEqual(fakestore.list_products(), [])

    @override_settings(CATALOG={"BASE_URL": "http://catalog.invalid"})
    def test_cache_ttl_defaults_to_sixty_seconds(self):
        self.assertEqual(fakestore._cache_ttl(), 60)

        with _patch_urlopen(return_value=_ok(["electronics"])) as urlopen:
            fakestore.fetch_categories()
            fakestore.fetch_categories()

        self.assertEqual(urlopen.call_count, 1)


# =====================================================
# ENDPOINTS
# =====================================================


class CatalogEndpointTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    def test_product_list(self):
        with _patch_urlopen(return_value=_ok([PRODUCT])):
            res = self.client.get(reverse("catalog:product-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data[0]["id"], 1)
        self.assertEqual(res.data[0]["rating"], {"rate": 3.9, "count": 120})

    def test_product_list_upstream_failure(self):
        with _patch_urlopen(side_effect=_http_error(500, "Internal Server Error")):
            res = self.client.get(reverse("catalog:product-list"), {"category": "jewelery"})

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data["error"], "Failed to fetch products")
        self.assertEqual(res.data["products"], [])
        self.assertEqual(res.data["status"], 500)
        self.assertEqual(res.data["statusText"], "Internal Server Error")

    def test_product_list_truncated_body(self):
        with _patch_urlopen(side_effect=IncompleteRead(b"[")):
            res = self.client.get(reverse("catalog:product-list"))

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data, {"error": "Failed to fetch products", "products": []})

    def test_product_list_malformed(self):
        with _patch_urlopen(return_value=_ok({"not": "a list"})):
            res = self.client.get(reverse("catalog:product-list"))

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data, {"error": "Invalid data format", "products": []})

    def test_product_detail(self):
        with _patch_urlopen(return_value=_ok(PRODUCT)):
            res = self.client.get(reverse("catalog:product-detail", args=[1]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["title"], "Backpack")

    def test_product_detail_not_found(self):
        with _patch_urlopen(return_value=_ok(b"")):
            res = self.client.get(reverse("catalog:product-detail", args=[999]))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data, {"error": "Product not found"})

    def test_categories(self):
        with _patch_urlopen(return_value=_ok(["electronics"])):
            res = self.client.get(reverse("catalog:category-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, ["electronics"])

    def test_categories_failure(self):
        with _patch_urlopen(side_effect=URLError("down")):
            res = self.client.get(reverse("catalog:category-list"))

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data, {"error": "Failed to fetch categories", "categories": []})

    def test_catalog_ignores_bad_tokens(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer garbage")
        with _patch_urlopen(return_value=_ok([PRODUCT])):
            res = self.client.get(reverse("catalog:product-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
