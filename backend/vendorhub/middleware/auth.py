"""
VendorHub Backend — Bearer Token Verification
===============================================

What:  FastAPI dependency guarding the mutating firm/product routes.
How:   Reads `Authorization: Bearer <token>`, verifies it with the
       TokenService, stores the vendor id on `request.state.vendor_id`
       and returns it to the handler.

Only the Authorization header is accepted. A raw `token` header is ignored,
so a request carrying only that is treated as unauthenticated.

Usage:
    @router.post("/add-firm")
    async def add_firm(vendor_id: UUID = Depends(require_vendor)):
        ...
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param

from vendorhub.exceptions import TokenInvalidError
from vendorhub.services.security import TokenService, token_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must surface as TokenMissingError with
# our error body, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False, description="Token from POST /vendor/login")


def get_token_service() -> TokenService:
    """Overridable in tests through app.dependency_overrides."""
    return token_service


async def require_vendor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> uuid.UUID:
    if credentials is None:
        # HTTPBearer yields None both for no header and for a non-Bearer one;
        # only the former (or "Bearer" with nothing after it) is a missing token
        scheme, _ = get_authorization_scheme_param(request.headers.get("Authorization"))
        if scheme and scheme.lower() != "bearer":
            raise TokenInvalidError(reason="malformed authorization header")
    token = credentials.credentials if credentials else None
    claims = tokens.verify(token)
    request.state.vendor_id = claims.vendor_id
    logger.debug("Authenticated vendor %s", claims.vendor_id)
    return claims.vendor_id
