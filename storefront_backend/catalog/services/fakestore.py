# catalog/services/fakestore.py

"""
UPSTREAM CATALOG CLIENT

Read-only client for the demo product API (default https://fakestoreapi.com).

Two layers:
- fetch_*: strict. Validate at the boundary and raise CatalogError subclasses.
- list_* / get_product: lenient. Never raise; degrade to [] / None and log.

Successful responses are cached for settings.CATALOG["CACHE_TTL"] seconds.
Failures are never cached.
"""

from __future__ import annotations

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from django.conf import settings
from django.core.cache import cache
from rest_framework.exceptions import ValidationError

from catalog.products import Product
from catalog.serializers import category_list_field
from catalog.services.exceptions import (
    CatalogError,
    ProductNotFoundError,
    UpstreamFormatError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://fakestoreapi.com"
DEFAULT_CACHE_TTL = 60
ALL_CATEGORIES = "all"

_HEADERS = {
    "User-Agent": "Mozilla/5.0 (StorefrontCatalogClient) Python-urllib",
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
}


# =====================================================
# CONFIG
# =====================================================


def _catalog_cfg() -> dict:
    cfg = getattr(settings, "CATALOG", {}) or {}
    return cfg if isinstance(cfg, dict) else {}


def _base_url() -> str:
    return (_catalog_cfg().get("BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")


def _timeout() -> int:
    return int(_catalog_cfg().get("TIMEOUT") or 10)


def _cache_ttl() -> int:
    ttl = _catalog_cfg().get("CACHE_TTL")
    return DEFAULT_CACHE_TTL if ttl is None else int(ttl)


def _cache_key(*parts: Any) -> str:
    return "catalog:" + ":".join(quote(str(p), safe="") for p in parts)


def normalize_category(category: str | None) -> str:
    """None, "" and "all" (any case) all mean: no category filter."""
    value = (category or "").strip()
    if value.lower() == ALL_CATEGORIES:
        return ""
    return value


# =====================================================
# TRANSPORT
# =====================================================


def _safe_preview(text: str, limit: int = 300) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def _request_text(path: str) -> str:
    url = f"{_base_url()}{path}"

    try:
        req = Request(url, headers={**_HEADERS, "Referer": f"{_base_url()}/"}, method="GET")
        with urlopen(req, timeout=_timeout()) as resp:
            return resp.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        reason = str(getattr(e, "reason", "") or "")
        raise UpstreamUnavailableError(
            f"Catalog HTTPError: {e.code} {reason}".strip(),
            status=e.code,
            status_text=reason,
        ) from e
    except URLError as e:
        raise UpstreamUnavailableError(f"Catalog URLError: {e.reason}") from e
    except OSError as e:
        # socket timeouts and connection resets surface as OSError subclasses
        raise UpstreamUnavailableError(f"Catalog request failed: {e}") from e
    except HTTPException as e:
        # truncated or garbled responses (IncompleteRead, BadStatusLine)
        raise UpstreamUnavailableError(f"Catalog response broken: {e!r}") from e
    except ValueError as e:
        # unusable CATALOG_BASE_URL
        raise UpstreamUnavailableError(f"Catalog URL invalid: {url}") from e


def _parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise UpstreamFormatError(
            f"Catalog returned non-JSON: {_safe_preview(raw)}"
        ) from e


def _parse_product(payload: Any) -> Product:
    try:
        return Product.from_payload(payload)
    except ValidationError as e:
        raise UpstreamFormatError(f"Invalid product payload: {e.detail}") from e


# =====================================================
# STRICT API
# =====================================================


def fetch_products(category: str | None = None) -> list[Product]:
    category = normalize_category(category)
    key = _cache_key("products", category or ALL_CATEGORIES)

    cached = cache.get(key)
    if cached is not None:
        return cached

    path = "/products"
    if category:
        path = f"/products/category/{quote(category, safe='')}"

    payload = _parse_json(_request_text(path))
    if not isinstance(payload, list):
        raise UpstreamFormatError(
            f"Catalog returned non-array data: {_safe_preview(str(payload))}"
        )

    products = [_parse_product(p) for p in payload]
    cache.set(key, products, _cache_ttl())
    return products


def fetch_categories() -> list[str]:
    key = _cache_key("categories")

    cached = cache.get(key)
    if cached is not None:
        return cached

    payload = _parse_json(_request_text("/products/categories"))

    try:
        categories = list(category_list_field().run_validation(payload))
    except ValidationError as e:
        raise UpstreamFormatError(f"Invalid categories payload: {e.detail}") from e

    cache.set(key, categories, _cache_ttl())
    return categories


def fetch_product(product_id: int) -> Product:
    """
    The upstream answers an unknown id with 404 or with an empty 200 body;
    both become ProductNotFoundError.
    """
    key = _cache_key("product", int(product_id))

    cached = cache.get(key)
    if cached is not None:
        return cached

    try:
        raw = _request_text(f"/products/{int(product_id)}")
    except UpstreamUnavailableError as e:
        if e.status == 404:
            raise ProductNotFoundError(f"Product {product_id} not found") from e
        raise

    if not raw.strip():
        raise ProductNotFoundError(f"Product {product_id} not found")

    payload = _parse_json(raw)
    if payload is None:
        raise ProductNotFoundError(f"Product {product_id} not found")

    product = _parse_product(payload)
    cache.set(key, product, _cache_ttl())
    return product


# =====================================================
# LENIENT API (never raises)
# =====================================================


def list_products(category: str | None = None) -> list[Product]:
    try:
        return fetch_products(category)
    except CatalogError as exc:
        logger.warning("Catalog products unavailable: %s", exc)
        return []


def list_categories() -> list[str]:
    try:
        return fetch_categories()
    except CatalogError as exc:
        logger.warning("Catalog categories unavailable: %s", exc)
        return []


def get_product(product_id: int) -> Product | None:
    try:
        return fetch_product(product_id)
    except CatalogError as exc:
        logger.warning("Catalog product %s unavailable: %s", product_id, exc)
        return None
