"""
The fixed set of tools this server exposes, with their input schemas.

The catalog is built once at import time and never mutated.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    properties: dict[str, dict[str, Any]] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the arguments object, as advertised by ``tools/list``."""
        return {
            "type": "object",
            "properties": {k: dict(v) for k, v in self.properties.items()},
            "required": list(self.required),
        }

    def to_dict(self) -> dict[str, Any]:
        """Render the descriptor in the MCP ``tools/list`` shape."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


_JOB_PATH = {
    "type": "string",
    "description": 'Path to the Jenkins job (e.g., "job/MyJob" or "view/xxx/job/MyJob")',
}
_BUILD_NUMBER = {
    "type": "string",
    "description": 'Build number (use "lastBuild" for most recent)',
}


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="get_build_status",
        description="Get the status of a Jenkins build",
        properties={"jobPath": _JOB_PATH, "buildNumber": {**_BUILD_NUMBER, "default": "lastBuild"}},
        required=("jobPath",),
    ),
    ToolDescriptor(
        name="trigger_build",
        description="Trigger a new Jenkins build",
        properties={
            "jobPath": _JOB_PATH,
            "parameters": {
                "type": ["object", "null"],
                "description": "Build parameters; values are sent as strings. Null or omitted sends none.",
                "additionalProperties": True,
            },
        },
        required=("jobPath", "parameters"),
    ),
    ToolDescriptor(
        name="get_build_log",
        description="Get the console output of a Jenkins build",
        properties={"jobPath": _JOB_PATH, "buildNumber": _BUILD_NUMBER},
        required=("jobPath", "buildNumber"),
    ),
    ToolDescriptor(
        name="list_recent_failed_jobs",
        description=(
            "List Jenkins jobs whose most recent build failed, "
            "sorted by most recent failure time."
        ),
        properties={
            "limit": {
                "type": "integer",
                "description": "Maximum number of failed jobs to return",
                "default": 10,
            },
        },
    ),
    ToolDescriptor(
        name="count_failed_jobs",
        description="Count how many Jenkins jobs currently have their last build in FAILURE state.",
    ),
    ToolDescriptor(
        name="get_failed_build_log",
        description="Get the console output of the last failed build for a given Jenkins job.",
        properties={"jobPath": _JOB_PATH},
        required=("jobPath",),
    ),
    ToolDescriptor(
        name="create_jenkins_user",
        description=(
            "Create a new Jenkins user in the internal user database. "
            "Requires admin permissions."
        ),
        properties={
            "username": {"type": "string", "description": "Username for the new account"},
            "password": {"type": "string", "description": "Password for the new account"},
            "fullName": {"type": "string", "description": "Full name of the user (optional)"},
            "email": {"type": "string", "description": "Email address of the user (optional)"},
        },
        required=("username", "password"),
    ),
)


def list_tools() -> tuple[ToolDescriptor, ...]:
    return TOOLS
