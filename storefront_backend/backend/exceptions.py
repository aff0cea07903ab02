# backend/exceptions.py

"""
API ERROR NORMALIZATION

Every error leaving the API is JSON shaped as:
    {"error": "<message>"}
Validation errors additionally carry the field map under "details".

Authentication failures (missing, expired or invalid token) are always
reported as 401 {"error": "Unauthorized"}.
"""

from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def error_response(*, message: str, http_status: int, **extra) -> Response:
    payload = {"error": message}
    payload.update(extra)
    return Response(payload, status=http_status)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return "Invalid request"
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else "Invalid request"
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        # Unhandled: let Django's 500 machinery (and Sentry) see it.
        return None

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = {"error": "Unauthorized"}
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return response

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "error": _first_message(exc.detail),
            "details": exc.detail,
        }
        return response

    detail = getattr(exc, "detail", None)
    if detail is None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else response.data

    response.data = {"error": _first_message(detail)}

    if response.status_code >= 500:
        logger.error("API error %s: %s", response.status_code, response.data["error"])

    return response
