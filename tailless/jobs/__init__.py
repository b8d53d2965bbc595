"""Jobs module for scheduled tasks."""

from tailless.jobs.purge_sessions import run_purge_sessions
from tailless.jobs.scheduler import (
    get_scheduler,
    remove_job,
    setup_all_jobs,
    setup_purge_sessions_job,
    shutdown_scheduler,
    start_scheduler,
)

__all__ = [
    "get_scheduler",
    "remove_job",
    "run_purge_sessions",
    "setup_all_jobs",
    "setup_purge_sessions_job",
    "shutdown_scheduler",
    "start_scheduler",
]
