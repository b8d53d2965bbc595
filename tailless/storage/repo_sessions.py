"""Repository for sign-in sessions."""

import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.storage.models import Session


def _utcnow() -> datetime:
    # SQLite stores naive datetimes; keep everything naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SessionsRepo:
    """Repository for session tokens."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_session(self, user_id: str, max_age_seconds: int) -> Session:
        """Issue a new opaque session token for ``user_id``."""
        now = _utcnow()
        row = Session(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=max_age_seconds),
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_active_session(self, token: str) -> Session | None:
        """Return the session for ``token`` if it exists and has not expired."""
        stmt = select(Session).where(
            Session.token == token,
            Session.expires_at > _utcnow(),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_session(self, token: str) -> bool:
        result = await self.session.execute(delete(Session).where(Session.token == token))
        return (result.rowcount or 0) > 0

    async def purge_expired(self) -> int:
        """Delete every expired session.

        Returns:
            Number of sessions removed
        """
        stmt = delete(Session).where(Session.expires_at <= _utcnow())
        result = await self.session.execute(stmt)
        return result.rowcount or 0
