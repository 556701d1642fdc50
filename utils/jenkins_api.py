"""
Thin wrappers for the Jenkins XML API.

Only fetching happens here.  Every failure (auth, HTTP status, unreachable
server, timeout) is logged and reported as None, so callers treat any
missing document as "no data" without caring why.
"""

import logging
import os
import time
from urllib.parse import quote

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_JENKINS_URL = os.environ.get("JENKINS_URL", "").rstrip("/")
_JENKINS_USER = os.environ.get("JENKINS_USER", "")
_JENKINS_TOKEN = os.environ.get("JENKINS_TOKEN", "")

_MISSING = [k for k, v in {
    "JENKINS_URL": _JENKINS_URL,
    "JENKINS_USER": _JENKINS_USER,
    "JENKINS_TOKEN": _JENKINS_TOKEN,
}.items() if not v]

if _MISSING:
    raise EnvironmentError(
        f"Missing required environment variables: {', '.join(_MISSING)}. "
        "Copy .env.example to .env and fill in your credentials."
    )

_AUTH = (_JENKINS_USER, _JENKINS_TOKEN)
_TIMEOUT = 30

_VERIFY_SSL = os.environ.get("JENKINS_VERIFY_SSL", "true").lower() not in ("false", "0", "no")

if not _VERIFY_SSL:
    import urllib3
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

_RETRYABLE_STATUSES = {429, 502, 503, 504}
_MAX_RETRIES = 2
_RETRY_DELAYS = (1, 3)  # seconds between retry 0→1 and 1→2

TEMPLATES_VIEW = "Templates"


def _get(path: str, **kwargs) -> requests.Response:
    """HTTP GET with bounded retry for transient failures (429/502/503/504)."""
    url = f"{_JENKINS_URL}{path}"
    for attempt in range(_MAX_RETRIES + 1):
        try:
            response = requests.get(
                url, auth=_AUTH, timeout=_TIMEOUT, verify=_VERIFY_SSL, **kwargs,
            )
            if response.status_code in _RETRYABLE_STATUSES and attempt < _MAX_RETRIES:
                time.sleep(_RETRY_DELAYS[attempt])
                continue
            response.raise_for_status()
            return response
        except requests.HTTPError as exc:
            logger.debug("Jenkins HTTP %s for %s", exc.response.status_code, url)
            raise
        except requests.ConnectionError:
            if attempt < _MAX_RETRIES:
                time.sleep(_RETRY_DELAYS[attempt])
                continue
            raise ConnectionError(
                f"Cannot reach Jenkins at {_JENKINS_URL}. "
                "Verify the server is running and JENKINS_URL is correct."
            )
        except requests.Timeout:
            if attempt < _MAX_RETRIES:
                time.sleep(_RETRY_DELAYS[attempt])
                continue
            raise TimeoutError(
                f"Jenkins did not respond within {_TIMEOUT} seconds ({url})."
            )
    raise RuntimeError(f"Exhausted retries for {url}")


def _job_path(job_name: str) -> str:
    """Convert a slash-separated job name into a Jenkins API path segment.

    Each segment is URL-encoded to handle spaces, '#', '%', etc.
    'my-org/my-repo/main' -> '/job/my-org/job/my-repo/job/main'
    'simple-job'          -> '/job/simple-job'
    """
    segments = [quote(seg, safe="") for seg in job_name.split("/")]
    return "/job/" + "/job/".join(segments)


def _view_path(view: str) -> str:
    """'Templates' -> '/view/Templates'; empty view -> '' (Jenkins root)."""
    if not view:
        return ""
    return "/view/" + quote(view.strip("/"), safe="")


def get_resource(path: str) -> str | None:
    """Fetch a Jenkins resource as text, or None when it cannot be fetched."""
    try:
        response = _get(path)
    except requests.HTTPError as exc:
        logger.debug("Jenkins resource %s unavailable (HTTP %s)", path, exc.response.status_code)
        return None
    except (ConnectionError, TimeoutError, requests.RequestException) as exc:
        logger.warning("Jenkins resource %s unavailable: %s", path, exc)
        return None
    response.encoding = "utf-8"
    return response.text


def get_jobs_xml(query: str, view: str = "") -> str | None:
    """Fetch the job listing of the root (or of *view*) for a ``tree`` query."""
    return get_resource(f"{_view_path(view)}/api/xml?tree={query}")


def get_job_xml(job_name: str, query: str) -> str | None:
    """Fetch a single job (folder-qualified name allowed) for a ``tree`` query."""
    return get_resource(f"{_job_path(job_name)}/api/xml?tree={query}")
