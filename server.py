"""
Jenkins Job Catalog MCP Server

A Model Context Protocol server that lets the AI find Jenkins jobs by free
text and look at a single job with its most active branches, without pulling
the full (and deeply nested) Jenkins job tree into its context window.

Transport: Streamable HTTP by default (MCP_TRANSPORT=http, host 0.0.0.0, port 8000).
           Set MCP_TRANSPORT=stdio to use stdio instead (e.g. for Cursor/Claude Desktop).
Logs:      All application logs go to stderr to avoid corrupting the JSON-RPC stream.
"""

import logging
import os
import sys
import time
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastmcp import FastMCP

from utils import job_catalog
from utils.job_model import Job
from utils.job_status import describe_status

load_dotenv()

# Route all library and application logs to stderr, never stdout.
logging.basicConfig(
    stream=sys.stderr,
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("jenkins-job-catalog")


def _env_int(name: str, default: int) -> int:
    """Read a positive integer setting, falling back to *default* when unusable."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%d: must be >= 1, using %d", name, value, default)
        return default
    return value


TOOL_DELAY = float(os.getenv("TOOL_DELAY_SECONDS", "2"))
MAX_DEPTH = _env_int("JENKINS_MAX_DEPTH", job_catalog.DEFAULT_MAX_DEPTH)
MAX_BRANCHES = _env_int("JENKINS_MAX_BRANCHES", job_catalog.DEFAULT_MAX_BRANCHES)

_MAX_LISTED_JOBS = 50

mcp = FastMCP(
    "Jenkins Job Catalog",
    instructions=(
        "You are a Jenkins job discovery assistant. "
        "Use search_jobs to find jobs whose name, display name or description contain some text; "
        "it searches folders and multibranch projects at every depth. "
        "Use search_template_jobs to find the templates used to create new jobs. "
        "Use get_job with an exact job id (folder/qualified/name) to see its status "
        "and its most recently built branches, including which ones are pull requests."
    ),
)


def _handle_error(exc: Exception, context: str) -> str:
    """Convert common exceptions into readable strings for the AI."""
    if isinstance(exc, ET.ParseError):
        return f"[{context}] Malformed XML returned by Jenkins: {exc}"
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return f"[{context}] {exc}"
    return f"[{context}] Unexpected error: {exc}"


def _format_timestamp(ts: int | None) -> str:
    if not ts:
        return "never"
    return datetime.fromtimestamp(ts / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _format_job_list(jobs: list[Job], criteria: str, where: str) -> str:
    if not jobs:
        return f"No jobs matching '{criteria}' in {where}."

    lines = [f"Jobs matching '{criteria}' in {where} ({len(jobs)} found):\n"]
    lines.append(f"  {'Id':<40} {'Status':<25} {'Name'}")
    lines.append(f"  {'-'*40} {'-'*25} {'-'*30}")
    for job in jobs[:_MAX_LISTED_JOBS]:
        status = describe_status(job.status, job.building)
        lines.append(f"  {job.id:<40} {status:<25} {job.name or ''}")

    if len(jobs) > _MAX_LISTED_JOBS:
        lines.append(
            f"\n[{len(jobs) - _MAX_LISTED_JOBS} more not shown; refine the search text]"
        )
    return "\n".join(lines)


def _format_job_detail(job: Job) -> str:
    lines = [
        f"Job:          {job.id}",
        f"Name:         {job.name or '-'}",
        f"Status:       {describe_status(job.status, job.building)}",
        f"Last build:   {_format_timestamp(job.last_build)}",
    ]
    if job.description:
        lines.append(f"Description:  {job.description}")

    branches = job.jobs or []
    if not branches:
        lines.append("\nNo active branches.")
        return "\n".join(lines)

    lines.append(f"\nMost recently built branches (max {MAX_BRANCHES}):\n")
    lines.append(f"  {'Branch':<30} {'Status':<25} {'Last build':<22} {'PR'}")
    lines.append(f"  {'-'*30} {'-'*25} {'-'*22} {'-'*3}")
    for b in branches:
        status = describe_status(b.status, b.building)
        pr = "yes" if b.pull_request_branch else ""
        lines.append(
            f"  {b.display_name:<30} {status:<25} {_format_timestamp(b.last_build):<22} {pr}"
        )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Discovery Tools
# ---------------------------------------------------------------------------


@mcp.tool
def search_jobs(criteria: str) -> str:
    """Find jobs whose id, display name or description contain the text.
    Case, accents and extra spaces are ignored. Nested folders are searched.

    Args:
        criteria: Text to look for, e.g. "bootstrap".
    """
    try:
        jobs = job_catalog.find_all_by_name(criteria, MAX_DEPTH)
    except Exception as exc:
        return _handle_error(exc, "search_jobs")
    finally:
        time.sleep(TOOL_DELAY)

    return _format_job_list(jobs, criteria, "Jenkins")


@mcp.tool
def search_template_jobs(criteria: str) -> str:
    """Find template jobs (the 'Templates' view) matching the text.

    Args:
        criteria: Text to look for.
    """
    try:
        jobs = job_catalog.find_all_templates_by_name(criteria, MAX_DEPTH)
    except Exception as exc:
        return _handle_error(exc, "search_template_jobs")
    finally:
        time.sleep(TOOL_DELAY)

    return _format_job_list(jobs, criteria, "the Templates view")


@mcp.tool
def get_job(job_id: str) -> str:
    """Show a job's status and its most recently built, enabled branches.

    Args:
        job_id: Full job name, slash-separated for folders (e.g. "org/repo").
    """
    try:
        job = job_catalog.find_by_id(job_id, MAX_BRANCHES)
    except Exception as exc:
        return _handle_error(exc, "get_job")
    finally:
        time.sleep(TOOL_DELAY)

    if job is None:
        return (
            f"Job '{job_id}' not found. Check the name (use search_jobs), "
            "the credentials, and that Jenkins is reachable."
        )
    return _format_job_detail(job)


def main() -> None:
    import socket

    transport = os.getenv("MCP_TRANSPORT", "http")
    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))

    if transport == "stdio":
        mcp.run(transport="stdio", show_banner=False)
    else:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as _s:
            try:
                _s.connect(("8.8.8.8", 80))
                external_ip = _s.getsockname()[0]
            except OSError:
                external_ip = "127.0.0.1"

        print(
            f"Jenkins Job Catalog MCP server starting\n"
            f"  Local:    http://127.0.0.1:{port}/mcp\n"
            f"  Network:  http://{external_ip}:{port}/mcp",
            file=sys.stderr,
        )
        mcp.run(transport=transport, host=host, port=port, show_banner=False)


if __name__ == "__main__":
    main()
