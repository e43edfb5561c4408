"""
Classified failures of a tool invocation.

Every class is a FastMCP ``ToolError`` (so the message always reaches the
client) and carries the JSON-RPC error code it maps to.
"""

from fastmcp.exceptions import ToolError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class JenkinsToolError(ToolError):
    """Base class; used as-is for failures that fit no other category."""

    code = INTERNAL_ERROR

    def __init__(self, message: str = "Unknown error occurred"):
        super().__init__(message)
        self.message = message


class UnknownToolError(JenkinsToolError):
    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.tool_name = name


class InvalidParamsError(JenkinsToolError):
    code = INVALID_PARAMS


class UpstreamError(JenkinsToolError):
    """Jenkins answered with an error status, or could not be reached."""

    code = INTERNAL_ERROR

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(f"Jenkins API error: {detail}")
        self.detail = detail
        self.status_code = status_code
