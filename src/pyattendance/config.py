"""Client configuration for pyattendance."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyattendance._constants import (
    API_URL,
    ATTENDANCE_PATH,
    DEFAULT_BRANCH,
    DEFAULT_REPOSITORY,
    SCHOOLS_PATH,
    USER_AGENT,
)
from pyattendance.exceptions import StoreConfigError
from pyattendance.models.document import DocumentId


def _env_number(env: Mapping[str, str], key: str, cast: type[int] | type[float]) -> int | float | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise StoreConfigError(f"{key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Client configuration.

    Parameters
    ----------
    token : str
        GitHub access token.  An empty token is accepted here; every
        operation then fails before touching the network.
    repository : str
        ``owner/name`` of the repository holding the documents.
    branch : str
        Branch read from and committed to.
    api_url : str
        API base URL.  Defaults to public GitHub.
    attendance_path : str
        Repository path of the attendance document.
    schools_path : str
        Repository path of the schools document.
    request_timeout : float or None
        Total per-request timeout in seconds.  ``None`` keeps the
        transport default.
    conflict_retries : int
        Extra fetch-merge-store attempts an upsert makes after a
        revision conflict.  ``0`` gives up on the first conflict.
    user_agent : str
        ``User-Agent`` header; GitHub rejects requests without one.
    """

    token: str = ""
    repository: str = DEFAULT_REPOSITORY
    branch: str = DEFAULT_BRANCH
    api_url: str = API_URL
    attendance_path: str = ATTENDANCE_PATH
    schools_path: str = SCHOOLS_PATH
    request_timeout: float | None = None
    conflict_retries: int = 0
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.conflict_retries < 0:
            raise StoreConfigError(f"conflict_retries must be >= 0, got {self.conflict_retries}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise StoreConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def has_credential(self) -> bool:
        """Whether a non-blank token is configured."""
        return bool(self.token.strip())

    def path_for(self, document_id: DocumentId) -> str:
        """Repository path of *document_id*."""
        if document_id is DocumentId.ATTENDANCE:
            return self.attendance_path
        return self.schools_path

    def contents_url(self, path: str) -> str:
        """Contents endpoint URL for a repository *path*."""
        return f"{self.api_url.rstrip('/')}/repos/{self.repository}/contents/{path.lstrip('/')}"

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``GITHUB_TOKEN`` and the optional ``PYATTENDANCE_*``
        variables. Explicit keyword arguments override environment values.

        Raises
        ------
        StoreConfigError
            When a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "GITHUB_TOKEN": "token",
            "PYATTENDANCE_REPOSITORY": "repository",
            "PYATTENDANCE_BRANCH": "branch",
            "PYATTENDANCE_API_URL": "api_url",
            "PYATTENDANCE_ATTENDANCE_PATH": "attendance_path",
            "PYATTENDANCE_SCHOOLS_PATH": "schools_path",
            "PYATTENDANCE_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # numeric fields, handle separately
        if "request_timeout" not in overrides:
            timeout = _env_number(env, "PYATTENDANCE_REQUEST_TIMEOUT", float)
            if timeout is not None:
                config_kwargs["request_timeout"] = timeout

        if "conflict_retries" not in overrides:
            retries = _env_number(env, "PYATTENDANCE_CONFLICT_RETRIES", int)
            if retries is not None:
                config_kwargs["conflict_retries"] = retries

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
