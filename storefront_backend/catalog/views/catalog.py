# catalog/views/catalog.py
"""
PUBLIC CATALOG

GET /api/products/?category=<name>
GET /api/products/<id>/
GET /api/categories/

Rules:
- AllowAny (public), no authentication attempted
- Upstream demo API is the source of truth for product data
- Upstream failures never surface as an unhandled error: the response is an
  empty result set plus diagnostic fields, with a 502 status

Security hardening:
- Throttle to reduce scraping/abuse
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from backend.exceptions import error_response
from catalog.serializers import CatalogErrorSerializer, ProductSerializer
from catalog.services import fakestore
from catalog.services.exceptions import (
    ProductNotFoundError,
    UpstreamFormatError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


class _PublicCatalogView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]


class ProductListView(_PublicCatalogView):
    """
    GET /api/products/?category=<name>
    """

    @extend_schema(
        tags=["Catalog"],
        parameters=[
            OpenApiParameter(
                name="category",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Category name. Omit, leave empty, or pass "all" for every product.',
            ),
        ],
        responses={
            200: ProductSerializer(many=True),
            429: OpenApiResponse(description="Rate limited"),
            502: CatalogErrorSerializer,
        },
        description="Public product list from the upstream catalog (AllowAny).",
    )
    def get(self, request, *args, **kwargs):
        category = request.query_params.get("category")

        try:
            products = fakestore.fetch_products(category)
        except UpstreamUnavailableError as exc:
            logger.error("Catalog products fetch failed: %s", exc)
            extra = {"products": []}
            if exc.status is not None:
                extra["status"] = exc.status
                extra["statusText"] = exc.status_text
            return error_response(
                message="Failed to fetch products",
                http_status=status.HTTP_502_BAD_GATEWAY,
                **extra,
            )
        except UpstreamFormatError as exc:
            logger.error("Catalog returned malformed products: %s", exc)
            return error_response(
                message="Invalid data format",
                http_status=status.HTTP_502_BAD_GATEWAY,
                products=[],
            )

        return Response([p.to_dict() for p in products], status=status.HTTP_200_OK)


class ProductDetailView(_PublicCatalogView):
    """
    GET /api/products/<id>/
    """

    @extend_schema(
        tags=["Catalog"],
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(description="Product not found"),
            502: CatalogErrorSerializer,
        },
        description="Single product from the upstream catalog (AllowAny).",
    )
    def get(self, request, product_id: int, *args, **kwargs):
        try:
            product = fakestore.fetch_product(product_id)
        except ProductNotFoundError:
            return error_response(
                message="Product not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        except (UpstreamUnavailableError, UpstreamFormatError) as exc:
            logger.error("Catalog product %s fetch failed: %s", product_id, exc)
            return error_response(
                message="Failed to fetch product",
                http_status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(product.to_dict(), status=status.HTTP_200_OK)


class CategoryListView(_PublicCatalogView):
    """
    GET /api/categories/
    """

    @extend_schema(
        tags=["Catalog"],
        responses={
            200: {"type": "array", "items": {"type": "string"}},
            502: CatalogErrorSerializer,
        },
        description="Category names from the upstream catalog (AllowAny).",
    )
    def get(self, request, *args, **kwargs):
        try:
            categories = fakestore.fetch_categories()
        except (UpstreamUnavailableError, UpstreamFormatError) as exc:
            logger.error("Catalog categories fetch failed: %s", exc)
            return error_response(
                message="Failed to fetch categories",
                http_status=status.HTTP_502_BAD_GATEWAY,
                categories=[],
            )

        return Response(categories, status=status.HTTP_200_OK)
