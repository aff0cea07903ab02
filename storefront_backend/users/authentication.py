# users/authentication.py

"""
OPTIONAL JWT AUTHENTICATION

For endpoints where a session is optional (e.g. cart count):
- Valid token   -> request.user is the shopper
- No token      -> anonymous
- Bad/expired   -> anonymous (instead of 401)
"""

from __future__ import annotations

import logging

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class OptionalJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed) as exc:
            logger.debug("Ignoring invalid token on optional-auth endpoint: %s", exc)
            return None
