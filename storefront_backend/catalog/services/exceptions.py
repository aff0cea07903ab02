# catalog/services/exceptions.py

"""
CATALOG SERVICE ERRORS

Raised by the upstream client at the boundary. Views decide how to degrade.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for all catalog upstream failures."""


class UpstreamUnavailableError(CatalogError):
    """Network failure or non-2xx response from the upstream catalog."""

    def __init__(self, message: str, *, status: int | None = None, status_text: str = ""):
        super().__init__(message)
        self.status = status
        self.status_text = status_text


class UpstreamFormatError(CatalogError):
    """Upstream answered, but the payload is not the shape we require."""


class ProductNotFoundError(CatalogError):
    """Upstream has no product with the requested id."""
