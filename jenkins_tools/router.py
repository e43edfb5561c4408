"""
Tool dispatch and error translation.

``invoke`` is the single entry point: look up the tool, validate its
arguments, run the handler, and turn any failure into a classified
``JenkinsToolError``.
"""

import logging
from typing import Any, Callable, NamedTuple

import requests
from mcp.types import CallToolResult, TextContent

from jenkins_tools import handlers
from jenkins_tools.config import JenkinsConfig
from jenkins_tools.errors import JenkinsToolError, UnknownToolError, UpstreamError
from jenkins_tools.params import (
    BuildLogParams,
    BuildStatusParams,
    CountFailedJobsParams,
    CreateUserParams,
    FailedBuildLogParams,
    RecentFailedJobsParams,
    ToolParams,
    TriggerBuildParams,
    validate_arguments,
)

logger = logging.getLogger(__name__)


class Route(NamedTuple):
    params: type[ToolParams]
    handler: Callable[[JenkinsConfig, Any], str]


ROUTES: dict[str, Route] = {
    "get_build_status": Route(BuildStatusParams, handlers.get_build_status),
    "trigger_build": Route(TriggerBuildParams, handlers.trigger_build),
    "get_build_log": Route(BuildLogParams, handlers.get_build_log),
    "list_recent_failed_jobs": Route(RecentFailedJobsParams, handlers.list_recent_failed_jobs),
    "count_failed_jobs": Route(CountFailedJobsParams, handlers.count_failed_jobs),
    "get_failed_build_log": Route(FailedBuildLogParams, handlers.get_failed_build_log),
    "create_jenkins_user": Route(CreateUserParams, handlers.create_jenkins_user),
}

_STATUS_HINTS = {
    401: "Authentication failed. Check JENKINS_USER and JENKINS_TOKEN.",
    404: "Not found. Verify the job path and build number.",
}


def _upstream_detail(exc: Exception) -> tuple[str, int | None]:
    """Prefer Jenkins' own JSON ``message``; fall back to the exception text."""
    response = getattr(exc, "response", None)
    if response is None:
        return str(exc), None

    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"]), status

    detail = str(exc) or f"HTTP {status}"
    hint = _STATUS_HINTS.get(status)
    if hint:
        detail = f"{detail} ({hint})"
    return detail, status


def invoke(config: JenkinsConfig, name: str, arguments: dict[str, Any] | None = None) -> str:
    """Run tool ``name`` and return its reply text.

    Raises UnknownToolError, InvalidParamsError, UpstreamError or a bare
    JenkinsToolError; no HTTP call is made before arguments validate.
    """
    route = ROUTES.get(name)
    if route is None:
        raise UnknownToolError(name)

    try:
        params = validate_arguments(name, route.params, arguments)
        return route.handler(config, params)
    except JenkinsToolError as exc:
        logger.warning("%s rejected: %s", name, exc.message)
        raise
    except (requests.RequestException, ConnectionError, TimeoutError) as exc:
        detail, status = _upstream_detail(exc)
        logger.warning("%s failed: %s", name, detail)
        raise UpstreamError(detail, status_code=status) from exc
    except Exception as exc:
        logger.exception("%s failed unexpectedly", name)
        raise JenkinsToolError() from exc


def call_tool(
    config: JenkinsConfig, name: str, arguments: dict[str, Any] | None = None,
) -> CallToolResult:
    """Like ``invoke`` but wrapped in the MCP reply envelope."""
    text = invoke(config, name, arguments)
    return CallToolResult(content=[TextContent(type="text", text=text)])
