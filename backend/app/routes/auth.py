"""
PasteBin Backend - Auth Route Handlers
=======================================

What:  POST /api/auth/signup and POST /api/auth/login.
How:   Parse the JSON body, delegate to AuthService, return token + user.
Who:   Called by the frontend Signup and Login forms (and PasteClient).

Error responses (handled by global exception handlers):
    HTTP 400: Missing fields, password policy, email already registered
    HTTP 401: Invalid credentials (login only)
    HTTP 500: Unexpected server error
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from app.schemas.common import ErrorResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    responses={
        200: {"description": "Account created", "model": AuthResponse},
        400: {"description": "Missing fields, weak password or existing user", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    """Register with email and password; the response logs the user in."""
    return await auth_service.signup(
        db=db,
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {"description": "Logged in", "model": AuthResponse},
        400: {"description": "Missing fields", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Log in",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.login(db=db, email=body.email, password=body.password)
