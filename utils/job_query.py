"""
Build the ``tree=`` field selector sent to the Jenkins XML API.

Multibranch projects live inside folders that may themselves live inside
organization folders, so a listing has to ask for nested ``jobs[...]``.
The nesting is bounded by ``max_depth`` to keep the response size under
control.
"""

from __future__ import annotations

JOB_FIELDS = (
    "name,fullName,displayName,description,color,"
    "lastBuild[timestamp],property[branch[head]]"
)

_RECURSION_MARKER = "__NESTED_JOBS__"
_TEMPLATE = JOB_FIELDS + _RECURSION_MARKER


def build_tree_query(max_depth: int = 5) -> str:
    """Return ``jobs[...]`` with the field template nested ``max_depth - 1`` times.

    With a depth of 2 the result reads ``jobs[FIELDS,jobs[FIELDS]]``.
    A depth of 1 or less yields a single level.
    """
    query = f"jobs[{_TEMPLATE}]"
    for _ in range(1, max_depth):
        query = query.replace(_RECURSION_MARKER, f",jobs[{_TEMPLATE}]")
    return query.replace(_RECURSION_MARKER, "")


def build_job_query() -> str:
    """Fields of a single job plus one level of children (its branches)."""
    return _TEMPLATE.replace(_RECURSION_MARKER, f",jobs[{JOB_FIELDS}]")
