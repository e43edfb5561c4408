"""
One handler per tool.

Each handler takes the immutable config plus its validated params, makes at
most two sequential Jenkins calls, and returns the reply text. Exceptions are
left to propagate; the router classifies them.
"""

import json
import logging
from typing import Any

import requests

from jenkins_tools import jenkins_api
from jenkins_tools.config import JenkinsConfig
from jenkins_tools.params import (
    BuildLogParams,
    BuildStatusParams,
    CountFailedJobsParams,
    CreateUserParams,
    FailedBuildLogParams,
    RecentFailedJobsParams,
    TriggerBuildParams,
)

logger = logging.getLogger(__name__)

_RECENT_JOBS_TREE = "jobs[name,url,lastBuild[number,result,timestamp,url]]"
_COUNT_JOBS_TREE = "jobs[name,lastBuild[result]]"
_LAST_FAILED_TREE = "name,url,lastFailedBuild[number,url]"
_CREATE_ACCOUNT_PATH = "/securityRealm/createAccountByAdmin"


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2)


def _form_value(value: Any) -> str:
    """Strings pass through; anything else is sent in its JSON spelling."""
    return value if isinstance(value, str) else json.dumps(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_build_status(config: JenkinsConfig, params: BuildStatusParams) -> str:
    path = jenkins_api.job_url(params.jobPath, params.buildNumber, "api", "json")
    data = jenkins_api.get_json(config, path)
    return _to_json({
        "building": data.get("building"),
        "result": data.get("result"),
        "timestamp": data.get("timestamp"),
        "duration": data.get("duration"),
        "url": data.get("url"),
    })


def trigger_build(config: JenkinsConfig, params: TriggerBuildParams) -> str:
    form = None
    if params.parameters is not None:
        form = {key: _form_value(value) for key, value in params.parameters.items()}

    path = jenkins_api.job_url(params.jobPath, "buildWithParameters")
    jenkins_api.post_form(config, path, data=form)
    logger.info("Triggered build for %s", params.jobPath)
    return "Build triggered successfully"


def get_build_log(config: JenkinsConfig, params: BuildLogParams) -> str:
    path = jenkins_api.job_url(params.jobPath, params.buildNumber, "consoleText")
    return jenkins_api.get_text(config, path)


def list_recent_failed_jobs(config: JenkinsConfig, params: RecentFailedJobsParams) -> str:
    """Jobs whose last build is FAILURE, most recent failure first."""
    data = jenkins_api.get_json(config, "/api/json", params={"tree": _RECENT_JOBS_TREE})

    failed = []
    for job in data.get("jobs") or []:
        last = job.get("lastBuild")
        # Jobs that never ran, or are mid-initialisation, have no usable timestamp.
        if not last or last.get("result") != "FAILURE" or not _is_number(last.get("timestamp")):
            continue
        failed.append(job)

    failed.sort(key=lambda job: job["lastBuild"]["timestamp"], reverse=True)

    failed_jobs = [
        {
            "name": job.get("name"),
            "jobUrl": job.get("url"),
            "buildNumber": job["lastBuild"].get("number"),
            "result": job["lastBuild"]["result"],
            "timestamp": job["lastBuild"]["timestamp"],
            "buildUrl": job["lastBuild"].get("url"),
        }
        for job in failed[:params.limit]
    ]
    return _to_json({"count": len(failed_jobs), "failedJobs": failed_jobs})


def count_failed_jobs(config: JenkinsConfig, params: CountFailedJobsParams) -> str:
    data = jenkins_api.get_json(config, "/api/json", params={"tree": _COUNT_JOBS_TREE})
    count = sum(
        1 for job in data.get("jobs") or []
        if (job.get("lastBuild") or {}).get("result") == "FAILURE"
    )
    return _to_json({"failedJobCount": count})


def get_failed_build_log(config: JenkinsConfig, params: FailedBuildLogParams) -> str:
    """Console log of the job's last failed build.

    A job that never failed is a normal answer, not an error.
    """
    info_path = jenkins_api.job_url(params.jobPath, "api", "json")
    info = jenkins_api.get_json(config, info_path, params={"tree": _LAST_FAILED_TREE})

    last_failed = info.get("lastFailedBuild") or {}
    number = last_failed.get("number")
    if not number:
        name = info.get("name") or params.jobPath
        return f'Job "{name}" has no failed builds.'

    log_path = jenkins_api.job_url(params.jobPath, number, "consoleText")
    return jenkins_api.get_text(config, log_path)


def create_jenkins_user(config: JenkinsConfig, params: CreateUserParams) -> str:
    """Create an account in Jenkins' own user database (admin only).

    The crumb is fetched fresh each time; both requests share one session so
    the crumb and its session cookie travel together.
    """
    form = {
        "username": params.username,
        "password1": params.password,
        "password2": params.password,
    }
    if params.fullName:
        form["fullname"] = params.fullName
    if params.email:
        form["email"] = params.email

    with requests.Session() as http:
        crumb_header = jenkins_api.get_crumb(config, http=http)
        jenkins_api.post_form(
            config, _CREATE_ACCOUNT_PATH, data=form, headers=crumb_header, http=http,
        )

    logger.info("Created Jenkins user %s", params.username)
    return (
        f'User "{params.username}" created successfully '
        "(assuming internal Jenkins user database)."
    )
