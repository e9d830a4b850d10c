"""
PasteBin Backend - Paste Route Handlers
========================================

What:  Create, read, list and delete pastes under /api/pastes.
How:   Resolve caller identity via dependencies, delegate to PasteService.
Who:   Called by the frontend MainPage / ViewPaste components (and PasteClient).

Auth per route:
    POST   /api/pastes          optional (owned if a valid token is sent)
    GET    /api/pastes/{uuid}   none
    GET    /api/pastes          required
    DELETE /api/pastes/{uuid}   required

Caching:
    GET /api/pastes/{uuid} is immutable until deleted, but deletion must be
    visible immediately, so responses are marked `no-store`.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_identity, require_identity
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.paste import CreatePasteRequest, CreatePasteResponse, PasteResponse
from app.services.paste_service import paste_service
from app.services.token_service import TokenIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pastes"])


@router.post(
    "/pastes",
    response_model=CreatePasteResponse,
    responses={
        200: {"description": "Paste stored", "model": CreatePasteResponse},
        400: {"description": "Empty content", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a paste",
    description=(
        "Stores a text paste and returns its public uuid. With a valid bearer "
        "token the paste is owned by that user; otherwise it is anonymous."
    ),
)
async def create_paste(
    body: CreatePasteRequest,
    identity: Optional[TokenIdentity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> CreatePasteResponse:
    return await paste_service.create_paste(db=db, content=body.content, owner=identity)


@router.get(
    "/pastes",
    response_model=List[PasteResponse],
    responses={
        200: {"description": "The caller's pastes, newest first"},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List my pastes",
)
async def list_pastes(
    identity: TokenIdentity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[PasteResponse]:
    return await paste_service.list_pastes(db=db, owner=identity)


@router.get(
    "/pastes/{paste_uuid}",
    response_model=PasteResponse,
    responses={
        200: {"description": "Paste content", "model": PasteResponse},
        404: {"description": "Paste not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a paste by uuid",
)
async def get_paste(
    paste_uuid: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PasteResponse:
    """
    Anyone holding the uuid may read the paste.

    The path segment is matched as an opaque string, so a malformed uuid
    is simply "not found" rather than a 422.
    """
    result = await paste_service.get_paste(db=db, paste_uuid=paste_uuid)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.delete(
    "/pastes/{paste_uuid}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Paste deleted", "model": MessageResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Paste not found or not owned by caller", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete one of my pastes",
)
async def delete_paste(
    paste_uuid: str,
    identity: TokenIdentity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await paste_service.delete_paste(db=db, paste_uuid=paste_uuid, owner=identity)
