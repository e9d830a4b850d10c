"""
PasteBin Backend - Application Package Initializer
===================================================

This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, identity resolution
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Policy, ownership, token issuance
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

`app.clients` holds a small HTTP client for the API, used by scripts and tests.
"""

__version__ = "1.0.0"
