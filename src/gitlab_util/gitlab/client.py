"""HTTP accessor for the GitLab REST API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from gitlab_util import __version__
from gitlab_util.errors import ApiError, ErrorKind, ProjectLookupError, SubmissionError

from .models import CreateMergeRequestRequest, MergeRequest, Project

logger = logging.getLogger(__name__)

API_PATH = "/api/v4"
DEFAULT_TIMEOUT = 30.0

ModelT = TypeVar("ModelT", bound=BaseModel)


def route_get_project_by_path(api_url: str, path: str) -> str:
    """URL of the project lookup; the path becomes a single escaped segment."""
    return f"{api_url}/projects/{quote(path, safe='')}"


def route_create_merge_request(api_url: str, project_id: int) -> str:
    """URL of the merge request creation call."""
    return f"{api_url}/projects/{project_id}/merge_requests"


class GitLabClient:
    """Thin client for the two GitLab endpoints gitlab-util needs.

    The bearer token is attached once at construction and reused for every
    request. Use it as a context manager so the connection pool is closed.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: GitLab instance URL, e.g. ``https://gitlab.com``
            token: Personal or project access token
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.api_url = base_url.rstrip("/") + API_PATH
        self._http = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "User-Agent": f"gitlab-util/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )
        logger.debug("Initialized GitLab client for %s (timeout=%ss)", self.api_url, timeout)

    def __enter__(self) -> GitLabClient:
        return self

    def __exit__(self, *_exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def get_project(self, path: str) -> Project:
        """
        Look up a project by its namespaced path.

        Args:
            path: Repository path such as ``group/subgroup/repo``

        Returns:
            Parsed project descriptor

        Raises:
            ProjectLookupError: On transport failure, non-2xx status, or an unexpected body
        """
        url = route_get_project_by_path(self.api_url, path)
        return self._request("GET", url, Project, ProjectLookupError)

    def create_merge_request(self, request: CreateMergeRequestRequest) -> MergeRequest:
        """
        Create a merge request in the project named by ``request.id``.

        Args:
            request: Creation payload

        Returns:
            The created merge request

        Raises:
            SubmissionError: On transport failure, non-2xx status, or an unexpected body
        """
        url = route_create_merge_request(self.api_url, request.id)
        return self._request("POST", url, MergeRequest, SubmissionError, payload=request.model_dump())

    def _request(
        self,
        method: str,
        url: str,
        model: type[ModelT],
        error_cls: type[ApiError],
        payload: dict[str, Any] | None = None,
    ) -> ModelT:
        """Send one request and parse the body into ``model``, classifying failures."""
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("GitLab API request failed: %s %s: %s", method, url, exc)
            raise error_cls(ErrorKind.TRANSPORT, url, method, 0, str(exc)) from exc

        if not response.is_success:
            logger.error("GitLab API error %s: %s %s", response.status_code, method, url)
            raise error_cls(ErrorKind.STATUS, url, method, response.status_code, response.text)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Unexpected GitLab response body for %s %s: %s", method, url, exc)
            raise error_cls(
                ErrorKind.DECODE, url, method, response.status_code, f"unmarshalling: {exc}"
            ) from exc
