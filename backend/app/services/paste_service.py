"""
PasteBin Backend - Paste Service (Snippet Store)
=================================================

What:  Create, fetch, list and delete pastes.
How:   Async SQLAlchemy queries against the `pastes` table; caller identity
       arrives as an optional TokenIdentity resolved by the API layer.
Who:   Called by the /api/pastes route handlers.

Access Rules:
    create  - anyone; owned only when the caller presented a valid token
    get     - anyone holding the uuid
    list    - identity required; only the caller's own pastes, newest first
    delete  - identity required; only when uuid AND owner both match

Design Decision:
    PasteService is stateless; it receives the db session for each call,
    so every request works in its own transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from app.models.paste import Paste, generate_public_id
from app.schemas.common import MessageResponse
from app.schemas.paste import CreatePasteResponse, PasteResponse
from app.services.token_service import TokenIdentity

logger = logging.getLogger(__name__)


class PasteService:
    """
    Business logic layer for paste operations.

    Error Handling Strategy:
        Client mistakes raise ValidationError / AuthenticationError /
        NotFoundError before or instead of touching storage. Anything the
        database throws is logged and wrapped in DatabaseError, whose
        message never reaches the client.
    """

    async def create_paste(
        self,
        db: AsyncSession,
        content: Optional[str],
        owner: Optional[TokenIdentity] = None,
    ) -> CreatePasteResponse:
        """
        Store a new paste and return its public identifier.

        Content is stored exactly as given; whitespace is only inspected to
        reject blank submissions.

        Raises:
            ValidationError: Content missing, empty or whitespace-only
            DatabaseError: Insert failed
        """
        if content is None or content.strip() == "":
            raise ValidationError("Content required", field="content")

        paste = Paste(
            uuid=generate_public_id(),
            content=content,
            user_id=owner.user_id if owner else None,
        )

        try:
            db.add(paste)
            await db.flush()
        except Exception as e:
            logger.error("Database error creating paste: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info(
            "Paste created: %s (%s, %d chars)",
            paste.uuid,
            f"user={owner.user_id}" if owner else "anonymous",
            len(content),
        )
        return CreatePasteResponse(uuid=paste.uuid)

    async def get_paste(self, db: AsyncSession, paste_uuid: str) -> PasteResponse:
        """
        Retrieve a single paste by its public identifier.

        Raises:
            NotFoundError: No paste with that uuid (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Paste).where(Paste.uuid == paste_uuid)
            )
            paste = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching paste %s: %s", paste_uuid, str(e))
            raise DatabaseError(context={"paste_uuid": paste_uuid})

        if paste is None:
            raise NotFoundError("Paste not found", resource_id=paste_uuid)

        return PasteResponse.model_validate(paste)

    async def list_pastes(
        self,
        db: AsyncSession,
        owner: Optional[TokenIdentity],
    ) -> List[PasteResponse]:
        """
        List every paste owned by the caller, most recent first.

        Query plan:
            SELECT ... FROM pastes WHERE user_id = :uid
            ORDER BY created_at DESC, id DESC
            → idx_pastes_user_id_created_at

        Raises:
            AuthenticationError: No valid identity (distinct from an empty list)
            DatabaseError: Query execution failed
        """
        if owner is None:
            raise AuthenticationError("Unauthorized")

        try:
            result = await db.execute(
                select(Paste)
                .where(Paste.user_id == owner.user_id)
                .order_by(desc(Paste.created_at), desc(Paste.id))
            )
            pastes = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing pastes: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return [PasteResponse.model_validate(paste) for paste in pastes]

    async def delete_paste(
        self,
        db: AsyncSession,
        paste_uuid: str,
        owner: Optional[TokenIdentity],
    ) -> MessageResponse:
        """
        Delete a paste the caller owns.

        A single DELETE filters on both uuid and owner, so "does not exist"
        and "belongs to someone else" both affect zero rows and produce the
        same NotFoundError.

        Raises:
            AuthenticationError: No valid identity
            NotFoundError: Unknown uuid, or not owned by the caller
            DatabaseError: Statement failed
        """
        if owner is None:
            raise AuthenticationError("Unauthorized")

        try:
            result = await db.execute(
                delete(Paste).where(
                    Paste.uuid == paste_uuid,
                    Paste.user_id == owner.user_id,
                )
            )
        except Exception as e:
            logger.error("Database error deleting paste %s: %s", paste_uuid, str(e))
            raise DatabaseError(context={"paste_uuid": paste_uuid})

        if result.rowcount == 0:
            raise NotFoundError("Paste not found or unauthorized", resource_id=paste_uuid)

        logger.info("Paste deleted: %s (user=%s)", paste_uuid, owner.user_id)
        return MessageResponse(message="Paste deleted")


# ── Singleton Instance ────────────────────────────────────────────────────
paste_service = PasteService()
