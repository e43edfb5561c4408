"""
Typed argument models, one per tool.

Arguments arrive as an untyped JSON object; they are validated here, before
any handler runs or any HTTP request is made. Unknown fields are rejected.
"""

from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from jenkins_tools import jenkins_api
from jenkins_tools.errors import InvalidParamsError

_MISSING_TYPES = {"missing", "string_too_short"}


class ToolParams(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)

    @classmethod
    def missing_message(cls, fields: list[str], tool_name: str) -> str:
        verb = "is" if len(fields) == 1 else "are"
        return f"{' and '.join(fields)} {verb} required for {tool_name}"


class _JobParams(ToolParams):
    jobPath: str = Field(min_length=1)

    @field_validator("jobPath")
    @classmethod
    def check_job_path(cls, value: str) -> str:
        jenkins_api.split_job_path(value)
        return value


# A build number or sentinel such as "lastBuild"; used as one URL segment.
BuildNumber = Annotated[str, Field(min_length=1), AfterValidator(jenkins_api.check_segment)]


class BuildStatusParams(_JobParams):
    buildNumber: BuildNumber = "lastBuild"


class TriggerBuildParams(_JobParams):
    # None means "send no form body", not "missing".
    parameters: dict[str, Any] | None = None


class BuildLogParams(_JobParams):
    buildNumber: BuildNumber


class RecentFailedJobsParams(ToolParams):
    limit: int = Field(default=10, ge=0)


class CountFailedJobsParams(ToolParams):
    pass


class FailedBuildLogParams(_JobParams):
    pass


class CreateUserParams(ToolParams):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    fullName: str | None = None
    email: str | None = None

    @classmethod
    def missing_message(cls, fields: list[str], tool_name: str) -> str:
        if {"username", "password"} & set(fields):
            return "username and password are required to create a Jenkins user"
        return super().missing_message(fields, tool_name)


def validate_arguments(
    tool_name: str, model: type[ToolParams], arguments: Any,
) -> ToolParams:
    """Validate raw arguments against ``model`` or raise InvalidParamsError."""
    try:
        return model.model_validate(arguments if arguments is not None else {})
    except ValidationError as exc:
        raise InvalidParamsError(_describe(tool_name, model, exc)) from exc


def _describe(tool_name: str, model: type[ToolParams], exc: ValidationError) -> str:
    missing: list[str] = []
    details: list[str] = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "arguments"
        if err["type"] in _MISSING_TYPES:
            if field not in missing:
                missing.append(field)
        else:
            details.append(f"{field}: {err['msg']}")

    if missing:
        return model.missing_message(missing, tool_name)
    return f"Invalid arguments for {tool_name}: " + "; ".join(details)
