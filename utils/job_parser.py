"""
Pure Jenkins XML API parser: no API calls, no ranking, no formatting.

Accepts the XML returned by ``.../api/xml?tree=...`` and produces ``Job``
values.  Two document shapes come back from Jenkins:

  - a listing (``<hudson>`` root, or a view) with ``<job>`` children, each of
    which may nest further ``<job>`` elements for folders;
  - a single job (``<workflowMultiBranchProject>``, ``<freeStyleProject>``...)
    whose ``<job>`` children are its branches.

An empty root (``<hudson/>``) is a normal "nothing there" answer and parses to
no job at all.  Malformed markup raises ``ElementTree.ParseError``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator

from utils.job_model import Job
from utils.job_status import parse_status

BRANCH_PROPERTY_CLASS = "org.jenkinsci.plugins.workflow.multibranch.BranchJobProperty"
PULL_REQUEST_HEAD_CLASS = "org.jenkinsci.plugins.github_branch_source.PullRequestSCMHead"

# Identifier sources, most specific first: a folder-qualified path beats the
# short name.
_ID_FIELDS = ("fullName", "name")


def parse_document(xml_content: str) -> ET.Element:
    """Parse XML text into its root element, raising ``ParseError`` if malformed."""
    return ET.fromstring(xml_content)


def parse_job(element: ET.Element, recursive: bool = False) -> Job | None:
    """Build a ``Job`` from a job element, or None if it carries no name at all.

    With *recursive*, every direct ``<job>`` child is parsed the same way and
    attached as ``jobs`` in document order (unranked).
    """
    job_id = _first_text(element, _ID_FIELDS)
    if job_id is None:
        return None

    status, building = parse_status(_child_text(element, "color"))
    children = None
    if recursive:
        children = [
            child for child in (
                parse_job(el, recursive=True) for el in element.findall("job")
            ) if child is not None
        ]

    return Job(
        id=job_id,
        name=_child_text(element, "displayName"),
        description=_child_text(element, "description"),
        status=status,
        building=building,
        last_build=_last_build(element),
        pull_request_branch=_is_pull_request_branch(element),
        jobs=children,
    )


def parse_jobs(element: ET.Element) -> list[Job]:
    """Parse the direct ``<job>`` children of a listing, flat and in order."""
    jobs = (parse_job(el) for el in element.findall("job"))
    return [job for job in jobs if job is not None]


def iter_jobs(element: ET.Element) -> Iterator[Job]:
    """Walk the element and all nested ``<job>`` elements, depth-first.

    Every named node is yielded as a flat ``Job`` (``jobs`` left as None).
    Unnamed nodes, such as the ``<hudson>`` root, are skipped but their
    children are still visited.
    """
    job = parse_job(element)
    if job is not None:
        yield job
    for child in element.findall("job"):
        yield from iter_jobs(child)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _child_text(parent: ET.Element, tag: str) -> str | None:
    el = parent.find(tag)
    if el is None or el.text is None:
        return None
    return el.text.strip() or None


def _first_text(parent: ET.Element, tags: tuple[str, ...]) -> str | None:
    """Return the text of the first of *tags* present and non-blank."""
    for tag in tags:
        value = _child_text(parent, tag)
        if value is not None:
            return value
    return None


def _last_build(element: ET.Element) -> int | None:
    last_build = element.find("lastBuild")
    if last_build is None:
        return None
    return _safe_int(_child_text(last_build, "timestamp"))


def _is_pull_request_branch(element: ET.Element) -> bool:
    """True when a BranchJobProperty declares a pull-request SCM head.

    Shape: ``<property _class="...BranchJobProperty"><branch>
    <head _class="...PullRequestSCMHead"/></branch></property>``
    """
    for prop in element.findall("property"):
        if prop.get("_class") != BRANCH_PROPERTY_CLASS:
            continue
        for head in prop.findall("branch/head"):
            if head.get("_class") == PULL_REQUEST_HEAD_CLASS:
                return True
    return False


def _safe_int(val: str | None) -> int | None:
    if val is None:
        return None
    try:
        return int(val)
    except (ValueError, TypeError):
        return None
