"""
Free-text job search over a flattened job tree.

Criteria and job fields go through the same ``normalize`` so that case,
accents and spacing never affect a match.  Results are deduplicated on the
normalized display name and returned in key order.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable

from utils.job_model import Job

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Fold *text* for comparison: no accents, case-folded, single-spaced.

    'Ligoj  - Crón' -> 'ligoj - cron'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE_RE.sub(" ", stripped.casefold()).strip()


def _contains(job: Job, needle: str) -> bool:
    return any(
        needle in normalize(value)
        for value in (job.id, job.name, job.description)
    )


def matches(job: Job, criteria: str) -> bool:
    """True when the criteria occurs in the job's id, name or description."""
    return _contains(job, normalize(criteria))


def search_jobs(jobs: Iterable[Job], criteria: str) -> list[Job]:
    """Return the matching jobs, one per normalized display name, sorted by it.

    When two matches fold to the same key the later one replaces the earlier
    one.  This can hide a job whose display name only differs by case or
    accents from another.
    """
    needle = normalize(criteria)
    by_key: dict[str, Job] = {}
    for job in jobs:
        if _contains(job, needle):
            by_key[normalize(job.display_name)] = job
    return [by_key[key] for key in sorted(by_key)]
