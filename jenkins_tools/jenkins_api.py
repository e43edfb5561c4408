"""
Clean wrappers for the Jenkins REST calls the tools make.

All functions raise meaningful exceptions rather than returning error strings,
so callers (the router) can decide how to surface the failure.
"""

import logging
from urllib.parse import quote

import requests

from jenkins_tools.config import JenkinsConfig

logger = logging.getLogger(__name__)

_CRUMB_PATH = "/crumbIssuer/api/json"
_REJECTED_SEGMENTS = {"", ".", ".."}


def _request(
    config: JenkinsConfig,
    method: str,
    path: str,
    *,
    http=None,
    **kwargs,
) -> requests.Response:
    """Authenticated HTTP request against the configured Jenkins.

    ``http`` may be a ``requests.Session`` when consecutive calls must share
    cookies; otherwise the module-level ``requests`` API is used. No retries.
    """
    url = f"{config.url}{path}"
    client = http if http is not None else requests
    try:
        response = client.request(
            method, url, auth=config.auth, timeout=config.timeout,
            verify=config.verify_ssl, **kwargs,
        )
    except requests.Timeout as exc:
        raise TimeoutError(
            f"Jenkins did not respond within {config.timeout:g} seconds ({url})."
        ) from exc
    except requests.ConnectionError as exc:
        raise ConnectionError(
            f"Cannot reach Jenkins at {config.url or '(JENKINS_URL not set)'}. "
            "Verify the server is running and JENKINS_URL is correct."
        ) from exc

    logger.debug("Jenkins %s %s -> HTTP %s", method, url, response.status_code)
    response.raise_for_status()
    return response


def split_job_path(job_path: str) -> list[str]:
    """Split a relative job path into its URL segments.

    'view/team/job/app' -> ['view', 'team', 'job', 'app']
    Leading/trailing slashes are ignored. Empty, '.' and '..' segments and
    backslashes raise ValueError.
    """
    if "\\" in job_path:
        raise ValueError("backslashes are not allowed in a job path")
    segments = job_path.strip("/").split("/")
    for seg in segments:
        if seg in _REJECTED_SEGMENTS:
            raise ValueError(f"invalid segment {seg!r} in job path {job_path!r}")
    return segments


def check_segment(segment: str) -> str:
    """Validate a value used as exactly one path segment (e.g. a build number)."""
    if "/" in segment or "\\" in segment or segment in _REJECTED_SEGMENTS:
        raise ValueError(f"invalid path segment {segment!r}")
    return segment


def job_url(job_path: str, *segments: str | int) -> str:
    """Build a request path below a job, URL-encoding every segment.

    'job/my app', 7, 'consoleText' -> '/job/my%20app/7/consoleText'
    Encoding each segment keeps '?', '#', '%' and pre-encoded slashes part of
    the name instead of the URL structure.
    """
    parts = split_job_path(job_path) + [check_segment(str(s)) for s in segments]
    return "/" + "/".join(quote(seg, safe="") for seg in parts)


def get_json(config: JenkinsConfig, path: str, **kwargs) -> dict:
    return _request(config, "GET", path, **kwargs).json()


def get_text(config: JenkinsConfig, path: str, **kwargs) -> str:
    """Fetch a plain-text resource such as consoleText, whole."""
    return _request(config, "GET", path, **kwargs).text


def post_form(
    config: JenkinsConfig,
    path: str,
    data: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    **kwargs,
) -> requests.Response:
    """POST form fields as application/x-www-form-urlencoded.

    With ``data=None`` the request carries no body at all.
    """
    return _request(config, "POST", path, data=data, headers=headers, **kwargs)


def get_crumb(config: JenkinsConfig, **kwargs) -> dict[str, str]:
    """Fetch a fresh CSRF crumb and return it as a request header mapping.

    Jenkins names the header itself (``crumbRequestField``), usually
    ``Jenkins-Crumb``. Returns {} when the response carries no usable crumb.
    """
    data = get_json(config, _CRUMB_PATH, **kwargs)
    field = data.get("crumbRequestField")
    value = data.get("crumb")
    if not field or value is None:
        logger.warning("Crumb issuer returned no crumb; sending request without one")
        return {}
    return {field: value}
