"""Pydantic models for the GitLab REST payloads used by gitlab-util."""

from __future__ import annotations

from pydantic import BaseModel


class Project(BaseModel):
    """Project descriptor returned by ``GET /projects/:id``.

    Only ``id`` is required; GitLab returns many more fields, and the
    unknown ones are ignored.
    """

    id: int
    name: str | None = None
    path: str | None = None
    path_with_namespace: str | None = None
    default_branch: str | None = None
    web_url: str | None = None
    archived: bool | None = None
    merge_requests_enabled: bool | None = None


class MergeRequest(BaseModel):
    """Merge request returned by ``POST /projects/:id/merge_requests``."""

    id: int
    web_url: str
    iid: int | None = None
    title: str | None = None
    source_branch: str | None = None
    target_branch: str | None = None
    state: str | None = None


class CreateMergeRequestRequest(BaseModel):
    """Body of the merge request creation call."""

    id: int
    source_branch: str
    target_branch: str
    title: str
    description: str = ""
