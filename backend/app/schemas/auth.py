"""
PasteBin Backend - Authentication Schemas
==========================================

What:  Request/response models for POST /api/auth/signup and /api/auth/login.

Request fields are Optional on purpose: presence checks happen in
AuthService so that a missing field answers 400 "Email and password
required" instead of FastAPI's generic 422 body.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Body of POST /api/auth/signup."""
    email: Optional[str] = Field(default=None, description="Login email (unique)")
    password: Optional[str] = Field(default=None, description="Raw password")
    confirm_password: Optional[str] = Field(
        default=None,
        description="Repeated password; when supplied it must equal `password`",
    )


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""
    email: Optional[str] = Field(default=None, description="Login email")
    password: Optional[str] = Field(default=None, description="Raw password")


class UserPublic(BaseModel):
    """The only user fields ever sent to a client."""
    id: int = Field(description="User identifier")
    email: str = Field(description="Login email")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """
    Returned by both signup and login.

    Example:
        {"token": "eyJhbGciOi...", "user": {"id": 1, "email": "a@x.com"}}
    """
    token: str = Field(description="Bearer token valid for the configured window")
    user: UserPublic
