"""
PasteBin Backend - ORM Models Package
======================================

Importing this package registers every table with `Base.metadata`,
which Alembic and the test suite rely on to build the schema.
"""

from app.models.user import User
from app.models.paste import Paste

__all__ = ["User", "Paste"]
