"""
PasteBin Backend - Identity Dependencies
=========================================

What:  FastAPI dependencies that turn the Authorization header into an
       optional caller identity.
How:   `get_current_identity` reads `Authorization: Bearer <token>` and
       verifies it; anything missing or invalid becomes None (anonymous).
       `require_identity` layers an explicit 401 on top for routes that
       need a logged-in caller.

Route usage:
    optional identity   → Depends(get_current_identity)
    required identity   → Depends(require_identity)
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import AuthenticationError
from app.services.token_service import TokenIdentity, token_service

# auto_error=False: a missing or non-Bearer header is not an error here
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[TokenIdentity]:
    """
    Resolve the caller's identity, downgrading bad tokens to anonymous.

    An expired or tampered token on an optional-auth route behaves exactly
    like no token at all.
    """
    if credentials is None:
        return None
    return token_service.verify(credentials.credentials)


async def require_identity(
    identity: Optional[TokenIdentity] = Depends(get_current_identity),
) -> TokenIdentity:
    """Resolve the caller's identity or fail with 401 Unauthorized."""
    if identity is None:
        raise AuthenticationError("Unauthorized")
    return identity
