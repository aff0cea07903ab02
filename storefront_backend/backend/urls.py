# backend/urls.py
"""
PATH: backend/urls.py

STOREFRONT URLS

/api/auth/...      session provider (register, login, me, logout, JWT)
/api/cart/...      cart store (auth required, except count/)
/api/products/...  catalog (public)
/api/categories/   catalog (public)
/api/health/       DB + cache probe (503 when degraded)
/api/docs/         Swagger UI

The admin mount point comes from settings.ADMIN_PATH.
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.core.cache import cache
from django.db import connection
from django.db.utils import DatabaseError
from django.urls import include, path, reverse
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

_ROOT_LINKS = {
    "auth": {
        "register": "users:register",
        "login": "users:login",
        "logout": "users:logout",
        "me": "users:me",
        "jwt_create": "jwt-create",
        "jwt_refresh": "jwt-refresh",
    },
    "cart": {
        "items": "cart:cart",
        "count": "cart:cart-count",
    },
    "catalog": {
        "products": "catalog:product-list",
        "categories": "catalog:category-list",
    },
    "docs": {
        "swagger": "swagger-ui",
        "schema": "schema",
    },
}


@extend_schema(responses={200: {"type": "object"}})
@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_root(request):
    links = {
        group: {key: reverse(name) for key, name in names.items()}
        for group, names in _ROOT_LINKS.items()
    }
    return Response({"message": "Storefront API is running", **links})


@extend_schema(
    responses={
        200: {"type": "object", "properties": {"status": {"type": "string"}}},
        503: {"type": "object", "properties": {"status": {"type": "string"}}},
    },
)
@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """
    db:    SELECT 1 on the default connection (users + cart rows)
    cache: round-trip on the cache that fronts the catalog upstream
    """
    report = {"status": "ok", "db": "ok", "cache": "ok"}

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        report.update(status="degraded", db="down", error=str(e))

    cache.set("health:probe", "1", 5)
    if cache.get("health:probe") != "1":
        report.update(status="degraded", cache="down")

    return Response(report, status=200 if report["status"] == "ok" else 503)


ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/").strip("/") + "/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("auth/", include("users.urls")),
    path("cart/", include("cart.urls")),
    path("", include("catalog.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
