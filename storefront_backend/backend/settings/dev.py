# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS

- The storefront front-end (FRONTEND_BASE_URL, default http://localhost:3000)
  is the only browser origin allowed to call the API.
- Catalog client and cart store log at DEBUG.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import FRONTEND_BASE_URL, LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "[::1]"])

_storefront_origin = FRONTEND_BASE_URL.rstrip("/")
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=[_storefront_origin])
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[_storefront_origin])

LOGGING = {
    **LOGGING,
    "loggers": {
        **LOGGING["loggers"],
        "catalog": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
        "cart": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
    },
}
