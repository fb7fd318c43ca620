"""
FastAPI dependencies for authorization.

The bearer token is optional on every route: a missing or invalid token
just means an anonymous caller. Write routes add require_admin.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.core.errors import UnauthorizedError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>), never auto-rejects
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Return the claims of the caller's token, or None when there is no valid token.
    """
    if not credentials:
        return None

    try:
        return decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Ignoring invalid bearer token: {e}")
        return None


async def require_admin(claims: Optional[dict] = Depends(get_current_claims)) -> dict:
    """
    Ensure the caller holds the admin capability.

    Raises:
        UnauthorizedError: No token, invalid token, or is_admin not true
    """
    if not claims or claims.get("is_admin") is not True:
        raise UnauthorizedError()

    return claims
