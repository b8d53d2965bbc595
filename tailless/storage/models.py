"""SQLAlchemy ORM models for Tailless.

Each row is stored as a document: list-valued fields (contributors, tags,
moment ids) live as JSON text inside the owning row rather than in join
tables. Entity timestamps are ISO-8601 strings as they appear on the wire.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tailless.storage.db import Base


class User(Base):
    """User profile as issued by the identity provider."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_users_name", "name"),
        Index("ix_users_email", "email"),
    )


class Space(Base):
    """A curated collection of Moments."""

    __tablename__ = "spaces"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    image: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    contributors_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    tags_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    moments_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    layout: Mapped[str] = mapped_column(String, nullable=False, default="blog")
    created_at: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint("layout IN ('blog', 'idea', 'timeline')", name="ck_spaces_layout"),
    )


class Moment(Base):
    """A single authored entry."""

    __tablename__ = "moments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    author: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[str] = mapped_column(String, nullable=False)
    modified_at: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        Index("ix_moments_author", "author"),
        Index("ix_moments_title", "title"),
    )


class Session(Base):
    """Sign-in session issued after the identity provider handshake."""

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (Index("ix_sessions_expires_at", "expires_at"),)
