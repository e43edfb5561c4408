"""
Jenkins MCP Server

Exposes a handful of Jenkins operations (build status, logs, triggering,
failure overviews, user creation) as MCP tools. The tool list and input
schemas come from ``jenkins_tools.catalog``; every call is handed, arguments
untouched, to ``jenkins_tools.router``, which validates them, talks to
Jenkins and classifies failures.

Transport: stdio by default. Set MCP_TRANSPORT=http to serve Streamable HTTP
           (MCP_HOST, default 0.0.0.0; MCP_PORT, default 8000).
Logs:      All application logs go to stderr to avoid corrupting the JSON-RPC stream.
"""

import logging
import os
import sys
from typing import Any

import urllib3
from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult

from jenkins_tools import catalog, router
from jenkins_tools.config import JenkinsConfig

load_dotenv()

# Route all library and application logs to stderr, never stdout.
logging.basicConfig(
    stream=sys.stderr,
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("jenkins-mcp")


def configure_tls(config: JenkinsConfig) -> None:
    """Silence urllib3's per-request warning once when verification is off."""
    if not config.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


CONFIG = JenkinsConfig.from_env()
configure_tls(CONFIG)

mcp = FastMCP(
    "jenkins-server",
    instructions=(
        "Tools for a Jenkins CI server. Job paths are relative Jenkins URL paths "
        "such as 'job/MyJob' or 'view/team/job/MyJob'. "
        "Use count_failed_jobs or list_recent_failed_jobs for an overview, "
        "get_failed_build_log or get_build_log to read console output, "
        "get_build_status to check one build, and trigger_build to start one."
    ),
)


class RoutedTool(Tool):
    """A catalog tool. FastMCP does no argument checking; the router does it all."""

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        result = router.call_tool(CONFIG, self.name, arguments)
        return ToolResult(content=result.content)


def register_tools(app: FastMCP) -> None:
    for descriptor in catalog.list_tools():
        app.add_tool(RoutedTool(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema(),
        ))


register_tools(mcp)


def main() -> None:
    transport = os.getenv("MCP_TRANSPORT", "stdio")
    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))

    if transport == "stdio":
        logger.info("Jenkins MCP server running on stdio")
        mcp.run(transport="stdio", show_banner=False)
    else:
        print(
            f"Jenkins MCP server starting\n"
            f"  Transport: {transport}\n"
            f"  Local:     http://127.0.0.1:{port}/mcp",
            file=sys.stderr,
        )
        mcp.run(transport=transport, host=host, port=port, show_banner=False)


if __name__ == "__main__":
    main()
