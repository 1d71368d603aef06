"""Process-wide single-flight guard for the refresh pipeline.

The scheduled job and the manual endpoint share this lock, so at most one
refresh transaction runs per process. A second caller does not wait: it gets
AlreadyInProgress straight away. Across worker processes the pipeline also
takes a PostgreSQL advisory lock inside its transaction.
"""
from contextlib import contextmanager
from threading import Lock
from typing import Iterator

from fpl_dashboard.core.errors import AlreadyInProgress

_REFRESH_LOCK = Lock()

# pg_try_advisory_xact_lock key shared by every worker
ADVISORY_LOCK_KEY = 731_018_001


@contextmanager
def refresh_guard(*, reason: str = "") -> Iterator[None]:
    if not _REFRESH_LOCK.acquire(blocking=False):
        msg = "a snapshot refresh is already running"
        if reason:
            msg = f"{msg} (rejected: {reason})"
        raise AlreadyInProgress(msg)
    try:
        yield
    finally:
        _REFRESH_LOCK.release()


def refresh_in_progress() -> bool:
    return _REFRESH_LOCK.locked()
