"""
PasteBin Backend - Paste Request/Response Schemas
==================================================

What:  Pydantic models defining the paste API contract.
How:   FastAPI uses these to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Owner information (`user_id`) is never part of any paste response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CreatePasteRequest(BaseModel):
    """Body of POST /api/pastes. Emptiness is checked by PasteService."""
    content: Optional[str] = Field(default=None, description="Text to share")


class CreatePasteResponse(BaseModel):
    """
    Example:
        {"uuid": "3f0c6a52-8d5e-4b8f-9c1e-2f6d7a9b0e11"}
    """
    uuid: str = Field(description="Public identifier of the new paste")


class PasteResponse(BaseModel):
    """
    What:  Full representation of a paste.
    Who:   Returned by GET /api/pastes/{uuid}, and as the items of GET /api/pastes.
    """
    id: int = Field(description="Row identifier")
    uuid: str = Field(description="Public identifier used in share URLs")
    content: str = Field(description="Paste text, exactly as submitted")
    created_at: datetime = Field(description="When the paste was created (UTC)")

    model_config = {"from_attributes": True}
