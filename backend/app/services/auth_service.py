"""
PasteBin Backend - Auth Service (Credential Store + Login Flow)
================================================================

What:  Signup and login: password policy, user persistence, credential
       checks, token issuance.
How:   Users live in the `users` table; passwords are hashed with passlib
       (app.security) in a worker thread so hashing never stalls the event
       loop; tokens come from TokenService.
Who:   Called by the /api/auth route handlers.

Signup Flow:
    validate input → reject known email → hash → INSERT → issue token

Login Flow:
    validate input → look up email → verify hash → issue token
    "no such user" and "wrong password" raise the same AuthenticationError.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    PasteBinError,
    ValidationError,
)
from app.models.user import User
from app.schemas.auth import AuthResponse, UserPublic
from app.security import dummy_verify, hash_password, verify_password
from app.services.token_service import token_service

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Email and password required"
INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "User already exists"


class AuthService:
    """
    Business logic layer for accounts and sessions.

    Responsibilities:
        - create_user(): Persist a new account (unique email)
        - authenticate(): Check an email/password pair
        - signup() / login(): Full API flows returning token + public user
    """

    # ── Credential Store ──────────────────────────────────────────────────

    async def create_user(self, db: AsyncSession, email: str, raw_password: str) -> User:
        """
        Persist a new user with a salted password hash.

        Raises:
            ConflictError: `email` is already registered (exact match)
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(select(User.id).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                raise ConflictError(USER_EXISTS)

            password_hash = await run_in_threadpool(hash_password, raw_password)
            user = User(email=email, password_hash=password_hash)
            db.add(user)

            try:
                await db.flush()
            except IntegrityError:
                # Lost a race with a concurrent signup for the same email;
                # the UNIQUE constraint decided the winner
                logger.info("Concurrent signup rejected by unique constraint")
                raise ConflictError(USER_EXISTS)

            logger.info("User created: id=%s", user.id)
            return user

        except PasteBinError:
            raise
        except Exception as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def authenticate(self, db: AsyncSession, email: str, raw_password: str) -> User:
        """
        Return the user owning `email` if `raw_password` matches.

        Raises:
            AuthenticationError: Unknown email or wrong password (same message)
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error during login lookup: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None:
            await run_in_threadpool(dummy_verify)
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not await run_in_threadpool(verify_password, raw_password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user

    # ── API Flows ─────────────────────────────────────────────────────────

    async def signup(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str] = None,
    ) -> AuthResponse:
        """
        Register a new account and log it in.

        Password policy (checked before any hashing):
            - email and password present and non-empty
            - confirm_password, when supplied, equals password
            - password at least settings.password_min_length characters

        Raises:
            ValidationError: Policy violation
            ConflictError: Email already registered
        """
        if not email or not password:
            raise ValidationError(MISSING_CREDENTIALS)
        if confirm_password is not None and confirm_password != password:
            raise ValidationError("Passwords do not match", field="confirm_password")
        if len(password) < settings.password_min_length:
            raise ValidationError(
                f"Password must be at least {settings.password_min_length} characters",
                field="password",
            )

        user = await self.create_user(db, email, password)
        return self._session_for(user)

    async def login(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResponse:
        """
        Exchange credentials for a token.

        Raises:
            ValidationError: Missing email or password
            AuthenticationError: Invalid credentials
        """
        if not email or not password:
            raise ValidationError(MISSING_CREDENTIALS)

        user = await self.authenticate(db, email, password)
        logger.info("User logged in: id=%s", user.id)
        return self._session_for(user)

    def _session_for(self, user: User) -> AuthResponse:
        token = token_service.issue(user.id, user.email)
        return AuthResponse(
            token=token,
            user=UserPublic(id=user.id, email=user.email),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
