"""
Choose which branches of a multibranch job are worth showing.

Disabled branches are dropped, the rest are ordered by activity (most recent
build first, never-built last) and the list is capped.
"""

from __future__ import annotations

from collections.abc import Iterable

from utils.job_model import Job
from utils.job_status import DISABLED

DEFAULT_MAX_BRANCHES = 10


def _activity_key(job: Job) -> tuple[bool, int]:
    # Never-built branches sort after every built one.
    if job.last_build is None:
        return True, 0
    return False, -job.last_build


def rank_branches(branches: Iterable[Job], max_branches: int = DEFAULT_MAX_BRANCHES) -> list[Job]:
    """Filter, sort and cap the branches of a resolved job.

    ``sorted`` is stable, so branches with the same timestamp (or none) keep
    the order Jenkins listed them in.  A cap below 1 is raised to 1.
    """
    max_branches = max(1, max_branches)
    active = [b for b in branches if b.status != DISABLED]
    return sorted(active, key=_activity_key)[:max_branches]
