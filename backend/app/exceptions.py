"""
PasteBin Backend - Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>}` JSON bodies with the matching status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    PasteBinError (base)
    ├── ValidationError      → 400 Bad Request
    ├── ConflictError        → 400 Bad Request (duplicate email)
    ├── AuthenticationError  → 401 Unauthorized
    ├── NotFoundError        → 404 Not Found (also covers "not yours")
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PasteBinError(Exception):
    """
    Base exception for all PasteBin application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PasteBinError):
    """
    Raised when client input fails validation.

    When:    Missing email/password, short password, mismatched confirmation,
             empty or whitespace-only paste content.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(PasteBinError):
    """
    Raised when a unique resource already exists.

    When:    Signup with an email that is already registered, including the
             loser of two concurrent signups racing on the UNIQUE constraint.
    HTTP:    400 Bad Request (the public API has always answered 400 here)
    """

    status_code = 400

    def __init__(
        self,
        message: str = "User already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(PasteBinError):
    """
    Raised when the caller's identity cannot be established.

    When:    Wrong email/password on login (one generic message for both),
             or a missing/expired/invalid bearer token on a route that
             requires identity.
    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PasteBinError):
    """
    Raised when a requested resource does not exist, or is not the caller's.

    HTTP:    404 Not Found

    Deleting someone else's paste and deleting a paste that never existed
    produce the same NotFoundError, so the response never reveals whether
    another user's paste exists.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Paste not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PasteBinError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
