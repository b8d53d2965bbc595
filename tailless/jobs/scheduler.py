"""APScheduler configuration and job management."""

from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from tailless.logging import get_logger

logger = get_logger(__name__)

_scheduler: AsyncIOScheduler | None = None

PURGE_SESSIONS_JOB_ID = "purge_sessions"


def get_scheduler() -> AsyncIOScheduler:
    """Get or create the scheduler instance."""
    global _scheduler

    if _scheduler is None:
        logger.info("Creating scheduler")
        _scheduler = AsyncIOScheduler(
            jobstores={"default": MemoryJobStore()},
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": 60,
            },
        )

    return _scheduler


def start_scheduler() -> None:
    """Start the scheduler if not already running."""
    scheduler = get_scheduler()
    if not scheduler.running:
        logger.info("Starting scheduler")
        scheduler.start()


def shutdown_scheduler() -> None:
    """Shutdown the scheduler gracefully."""
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        logger.info("Shutting down scheduler")
        _scheduler.shutdown(wait=True)
    _scheduler = None


def remove_job(job_id: str) -> bool:
    """Remove a job from the scheduler."""
    scheduler = get_scheduler()
    try:
        scheduler.remove_job(job_id)
        logger.info(f"Removed job {job_id}")
        return True
    except JobLookupError:
        logger.debug(f"Job {job_id} not found")
        return False


def setup_purge_sessions_job() -> str | None:
    """Schedule the expired-session purge."""
    from tailless.config import config
    from tailless.jobs.purge_sessions import run_purge_sessions

    if config.session_purge_interval_minutes <= 0:
        logger.info("Session purge job not scheduled: SESSION_PURGE_INTERVAL_MINUTES<=0")
        return None

    scheduler = get_scheduler()
    remove_job(PURGE_SESSIONS_JOB_ID)

    job = scheduler.add_job(
        run_purge_sessions,
        "interval",
        minutes=config.session_purge_interval_minutes,
        id=PURGE_SESSIONS_JOB_ID,
        name="Expired Session Purge",
        replace_existing=True,
    )
    logger.info(
        f"Session purge job scheduled every {config.session_purge_interval_minutes} min"
    )
    return job.id


def setup_all_jobs() -> None:
    """Setup all scheduled jobs."""
    setup_purge_sessions_job()
    logger.info("All jobs configured")
