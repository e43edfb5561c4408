"""
Connection settings for the Jenkins server.

Read once at startup and passed explicitly to every API call; nothing in the
package keeps its own copy of the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0
_FALSY = ("false", "0", "no")


@dataclass(frozen=True)
class JenkinsConfig:
    url: str = ""
    user: str = ""
    token: str = ""
    verify_ssl: bool = True
    timeout: float = _DEFAULT_TIMEOUT

    @property
    def auth(self) -> tuple[str, str]:
        return (self.user, self.token)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "JenkinsConfig":
        """Build a config from JENKINS_* variables.

        Missing URL/user/token fall back to empty strings so the server can
        still start and list its tools; a warning names what is missing.
        """
        env = os.environ if environ is None else environ

        url = env.get("JENKINS_URL", "").rstrip("/")
        user = env.get("JENKINS_USER", "")
        token = env.get("JENKINS_TOKEN", "")

        missing = [k for k, v in {
            "JENKINS_URL": url,
            "JENKINS_USER": user,
            "JENKINS_TOKEN": token,
        }.items() if not v]
        if missing:
            logger.warning(
                "Missing environment variables: %s. Jenkins calls will likely fail.",
                ", ".join(missing),
            )

        verify_ssl = env.get("JENKINS_VERIFY_SSL", "true").lower() not in _FALSY

        raw_timeout = env.get("JENKINS_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else _DEFAULT_TIMEOUT
        except ValueError:
            logger.warning("Ignoring invalid JENKINS_TIMEOUT=%r", raw_timeout)
            timeout = _DEFAULT_TIMEOUT

        return cls(url=url, user=user, token=token, verify_ssl=verify_ssl, timeout=timeout)
