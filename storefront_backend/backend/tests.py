# backend/tests.py

"""
PROJECT-LEVEL TESTS

Run with:
    python manage.py test backend -v 2
"""

from __future__ import annotations

from unittest import mock

from django.core.cache import cache
from django.db.utils import OperationalError
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient


class ApiRootTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    def test_root_lists_endpoints(self):
        res = self.client.get("/api/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["cart"]["count"], "/api/cart/count/")
        self.assertEqual(res.data["catalog"]["products"], "/api/products/")
        self.assertEqual(res.data["auth"]["login"], "/api/auth/login/")

    def test_health_ok(self):
        res = self.client.get("/api/health/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "ok")

    def test_health_degraded_when_db_down(self):
        with mock.patch(
            "django.db.backends.base.base.BaseDatabaseWrapper.cursor",
            side_effect=OperationalError("db gone"),
        ):
            res = self.client.get("/api/health/")

        self.assertEqual(res.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(res.data["db"], "down")


class ExceptionHandlerTests(TestCase):
    def test_unknown_route_method_uses_error_shape(self):
        res = APIClient().delete("/api/products/")

        self.assertEqual(res.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertIn("error", res.data)
