"""Expired session purge job.

Runs every ``SESSION_PURGE_INTERVAL_MINUTES``. Expired sessions are already
refused by ``authorize_user``; this only reclaims the rows.
"""

from tailless.logging import get_logger

logger = get_logger(__name__)


async def run_purge_sessions() -> dict:
    """Delete every session whose expiry has passed.

    Returns:
        Summary dict with the number of purged sessions.
    """
    from tailless.storage import SessionsRepo, get_session_factory

    session_factory = get_session_factory()

    async with session_factory() as session:
        purged = await SessionsRepo(session).purge_expired()
        await session.commit()

    if purged:
        logger.info(f"purge_sessions: removed {purged} expired session(s)")
    else:
        logger.debug("purge_sessions: nothing to remove")
    return {"purged": purged}
