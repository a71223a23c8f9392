"""Error types raised by gitlab-util."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """How a GitLab API call failed."""

    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"


class GitLabUtilError(Exception):
    """Base class for all gitlab-util errors."""


class ConfigurationError(GitLabUtilError):
    """Raised when required settings are missing or the config file is invalid."""


class ApiError(GitLabUtilError):
    """A failed GitLab API call.

    Args:
        kind: Failure class (transport, status or decode)
        endpoint: Full URL of the request
        method: HTTP method, upper case
        status_code: HTTP status, 0 when no response was received
        message: Transport error text, response body, or validation error
    """

    def __init__(self, kind: ErrorKind, endpoint: str, method: str, status_code: int, message: str):
        super().__init__(message)
        self.kind = kind
        self.endpoint = endpoint
        self.method = method
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value}, method={self.method}, "
            f"endpoint={self.endpoint}, status={self.status_code}): {self.message}"
        )


class ProjectLookupError(ApiError):
    """Raised when a repository path cannot be resolved to a project."""


class SubmissionError(ApiError):
    """Raised when a merge request cannot be created."""
