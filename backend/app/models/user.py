"""
PasteBin Backend - User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Used by AuthService for signup/login and by Alembic for schema management.

Table Design:
    - Integer primary key: internal only; exposed as `user.id` in auth responses
    - email: UNIQUE constraint, compared case-sensitively exactly as stored
    - password_hash: passlib hash string (algorithm, cost, salt and digest)
    - created_at: UTC with timezone
"""

from datetime import datetime, timezone
from typing import List, TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.paste import Paste


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created once at signup. Never updated or deleted by the service.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Uniqueness is enforced here, by the database, so that two concurrent
    # signups for the same address cannot both succeed
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Login key, unique and case-sensitive",
    )

    # Never serialized into any response schema
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted one-way hash of the user's password",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    pastes: Mapped[List["Paste"]] = relationship(back_populates="owner")

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
