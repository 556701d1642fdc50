"""
Map Jenkins "ball color" codes onto a canonical status and a building flag.

Jenkins reports job state as a single color string (``blue``, ``red``,
``yellow``, ``notbuilt``, ``disabled``...).  A build in progress is signalled
by an ``_anime`` suffix on that same string (``blue_anime``).  Callers get the
suffix-free status plus a separate boolean.
"""

from __future__ import annotations

DISABLED = "disabled"
ANIME_SUFFIX = "_anime"

_STATUS_LABELS = {
    "blue": "SUCCESS",
    "red": "FAILURE",
    "yellow": "UNSTABLE",
    "grey": "DISABLED",
    "disabled": "DISABLED",
    "notbuilt": "NEVER BUILT",
    "aborted": "ABORTED",
}


def parse_status(code: str | None) -> tuple[str, bool]:
    """Return ``(status, building)`` for a raw color code.

    A missing or blank code means the job exposes no color at all, which
    Jenkins does for disabled jobs and for folders.
    """
    code = (code or "").strip() or DISABLED
    if code.endswith(ANIME_SUFFIX):
        return code[: -len(ANIME_SUFFIX)], True
    return code, False


def describe_status(status: str, building: bool = False) -> str:
    label = _STATUS_LABELS.get(status, status.upper())
    return f"{label} (building)" if building else label
