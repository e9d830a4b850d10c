"""
PasteBin Backend - Session Token Service
=========================================

What:  Issues and verifies signed, time-bounded bearer tokens.
How:   HS256 JSON Web Tokens (PyJWT) carrying `{id, email, iat, exp}`,
       signed with `settings.jwt_secret`.
Who:   AuthService issues tokens; the identity dependency verifies them.

Verification never raises. Every failure mode (absent, malformed, bad
signature, expired, wrong claim types) collapses into `None`, and the
caller decides whether `None` means "anonymous" or "401".

Limitation:
    There is no revocation list. A token stays valid for its whole window
    even if the user record changes; logging out only discards the token
    on the client.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenIdentity:
    """The identity asserted by a valid token."""

    user_id: int
    email: str


class TokenService:
    """
    Stateless token issuer/verifier.

    Args:
        secret: HMAC key (defaults to settings.jwt_secret)
        algorithm: HS256/HS384/HS512 (defaults to settings.jwt_algorithm)
        expires_in: Validity window (defaults to settings.jwt_expire_days)
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expires_in: Optional[timedelta] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expires_in = expires_in if expires_in is not None else timedelta(
            days=settings.jwt_expire_days
        )

    def issue(self, user_id: int, email: str) -> str:
        """Produce a signed token for `{user_id, email}` valid for `expires_in`."""
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Optional[TokenIdentity]:
        """
        Validate signature and expiry.

        Returns:
            TokenIdentity on success, None for anything else.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected bearer token: %s", type(e).__name__)
            return None

        user_id = payload.get("id")
        email = payload.get("email")
        # bool is an int subclass; a token claiming id=true is not an identity
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            return None
        if not isinstance(email, str) or not email:
            return None

        return TokenIdentity(user_id=user_id, email=email)


# ── Singleton Instance ────────────────────────────────────────────────────
token_service = TokenService()
