"""Adapts GitLab API responses to gitlab-util result types."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from .gitlab import CreateMergeRequestRequest, GitLabClient

logger = logging.getLogger(__name__)


class ProjectRef(BaseModel):
    """A resolved project."""

    id: int
    path: str


class MergeRequestResult(BaseModel):
    """A created merge request."""

    id: int
    link: str
    target_branch: str | None = None
    title: str | None = None

    def __str__(self) -> str:
        return f"MergeRequest(id={self.id}, link={self.link})"


class GitLabManager:
    """Resolves repositories and submits merge requests through a GitLabClient."""

    def __init__(self, client: GitLabClient):
        self.client = client

    def resolve_project(self, repository_path: str) -> ProjectRef:
        """
        Resolve a repository path to its project id.

        Args:
            repository_path: Namespaced path, e.g. ``group/repo``

        Returns:
            Project reference

        Raises:
            ProjectLookupError: If the lookup call fails
        """
        project = self.client.get_project(repository_path)
        logger.info("Resolved %s to project id %d", repository_path, project.id)
        return ProjectRef(id=project.id, path=project.path_with_namespace or repository_path)

    def submit_merge_request(
        self,
        project_id: int,
        source_branch: str,
        target_branch: str,
        title: str,
        description: str = "",
    ) -> MergeRequestResult:
        """
        Create a merge request.

        Args:
            project_id: Numeric project id
            source_branch: Branch to merge from
            target_branch: Branch to merge into
            title: Final, already formatted title
            description: Merge request description

        Returns:
            Id and web URL of the created merge request

        Raises:
            SubmissionError: If the creation call fails
        """
        request = CreateMergeRequestRequest(
            id=project_id,
            source_branch=source_branch,
            target_branch=target_branch,
            title=title,
            description=description,
        )
        merge_request = self.client.create_merge_request(request)
        logger.info("Created merge request %d: %s", merge_request.id, merge_request.web_url)
        return MergeRequestResult(
            id=merge_request.id,
            link=merge_request.web_url,
            target_branch=target_branch,
            title=title,
        )
