"""
PasteBin Backend - Paste SQLAlchemy Model
==========================================

What:  ORM model representing the `pastes` table.
Who:   Used by PasteService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: sequential integer, internal row identity
    - uuid: random UUID4 string, the only identifier a client needs to read
      a paste; sequential ids cannot be walked to discover other pastes
    - content: TEXT, stored verbatim (no trimming, no length ceiling)
    - user_id: nullable FK; NULL marks an anonymous paste that nobody can
      list or delete afterwards
    - created_at: UTC with timezone, set once

    Index on (user_id, created_at):
        Serves "my pastes, newest first", the only listing query.
"""

import uuid as uuid_lib
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.user import User


def generate_public_id() -> str:
    """128-bit random identifier rendered as a 36-char UUID string."""
    return str(uuid_lib.uuid4())


class Paste(Base):
    """
    A stored block of user-submitted text.

    Lifecycle:
        1. Created on submission, owned if the caller presented a valid token
        2. Read by anyone who knows the uuid
        3. Deleted only by its owner; never updated
    """

    __tablename__ = "pastes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    uuid: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        unique=True,
        default=generate_public_id,
        comment="Public, unguessable identifier used in share URLs",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        comment="Owner; NULL for anonymous pastes",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    owner: Mapped[Optional["User"]] = relationship(back_populates="pastes")

    __table_args__ = (
        Index("idx_pastes_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Paste(id={self.id}, uuid='{self.uuid}', user_id={self.user_id})>"
