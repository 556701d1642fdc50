"""
Job lookup operations: fetch from Jenkins, then parse, rank or search.

``search_document`` and ``resolve_document`` hold the pure part and work on
XML text alone; the ``find_*`` functions add the fetch.  A document that
could not be fetched is "no data", never an error.  Malformed XML raises
``xml.etree.ElementTree.ParseError``.
"""

from __future__ import annotations

from dataclasses import replace

from utils import jenkins_api
from utils.branch_ranker import DEFAULT_MAX_BRANCHES, rank_branches
from utils.job_model import Job
from utils.job_parser import iter_jobs, parse_document, parse_job
from utils.job_query import build_job_query, build_tree_query
from utils.job_search import search_jobs

DEFAULT_MAX_DEPTH = 5

_EMPTY_DOCUMENT = "<a/>"


def search_document(xml_content: str | None, criteria: str) -> list[Job]:
    """Search every job at every depth of a listing document."""
    root = parse_document(xml_content or _EMPTY_DOCUMENT)
    return search_jobs(iter_jobs(root), criteria)


def resolve_document(
    xml_content: str | None, max_branches: int = DEFAULT_MAX_BRANCHES,
) -> Job | None:
    """Parse a single-job document and rank its branches.

    Returns None when the document is missing or describes no job
    (``<hudson/>``).
    """
    if not xml_content:
        return None
    job = parse_job(parse_document(xml_content), recursive=True)
    if job is None:
        return None
    return replace(job, jobs=rank_branches(job.jobs or [], max_branches))


def find_all_by_name(
    criteria: str, max_depth: int = DEFAULT_MAX_DEPTH, view: str = "",
) -> list[Job]:
    """Jobs of the Jenkins root (or of *view*) whose id, name or description match."""
    xml_content = jenkins_api.get_jobs_xml(build_tree_query(max_depth), view)
    return search_document(xml_content, criteria)


def find_all_templates_by_name(criteria: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Job]:
    return find_all_by_name(criteria, max_depth, view=jenkins_api.TEMPLATES_VIEW)


def find_by_id(job_id: str, max_branches: int = DEFAULT_MAX_BRANCHES) -> Job | None:
    """Resolve one job by its folder-qualified name, with its top branches."""
    xml_content = jenkins_api.get_job_xml(job_id, build_job_query())
    return resolve_document(xml_content, max_branches)
