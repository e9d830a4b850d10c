"""
PasteBin Backend - Password Hashing
====================================

What:  Thin wrapper around passlib's CryptContext.
How:   PBKDF2-SHA256 with a per-hash random salt and passlib's default
       round count. The hash string embeds scheme, rounds and salt, so
       raising the cost later only affects new hashes.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """Hash a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a candidate password against a stored hash."""
    return pwd_context.verify(plain_password, hashed)


def dummy_verify() -> None:
    """Spend the time of one verification when there is no hash to check."""
    pwd_context.dummy_verify()
