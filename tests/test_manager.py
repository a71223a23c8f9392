"""Tests for the resolver / submitter manager."""

import httpx
import pytest

from gitlab_util.errors import ErrorKind, ProjectLookupError, SubmissionError
from gitlab_util.manager import MergeRequestResult, ProjectRef


def test_resolve_project(manager, fake_gitlab):
    """Test a repository path resolves to the project id."""
    project = manager.resolve_project("group/repo")

    assert project == ProjectRef(id=7, path="group/repo")
    assert fake_gitlab.calls == [("GET", "/api/v4/projects/group%2Frepo")]


def test_resolve_project_falls_back_to_requested_path(manager, fake_gitlab):
    """Test the requested path is kept when GitLab omits path_with_namespace."""
    fake_gitlab.fail_on(1, httpx.Response(200, json={"id": 3}))

    assert manager.resolve_project("a/b/c") == ProjectRef(id=3, path="a/b/c")


def test_resolve_project_failure(manager, fake_gitlab):
    """Test lookup failures surface as ProjectLookupError."""
    fake_gitlab.fail_on(1, httpx.Response(401, json={"message": "401 Unauthorized"}))

    with pytest.raises(ProjectLookupError) as exc_info:
        manager.resolve_project("group/repo")

    assert exc_info.value.kind == ErrorKind.STATUS
    assert exc_info.value.status_code == 401


def test_submit_returns_response_id_and_url_unchanged(manager, fake_gitlab):
    """Test the result carries exactly the response's id and web_url."""
    fake_gitlab.fail_on(
        1,
        httpx.Response(201, json={"id": 98765, "web_url": "https://gitlab.example.com/g/r/-/merge_requests/12"}),
    )

    result = manager.submit_merge_request(7, "feature", "uat", "[uat] x", "")

    assert result == MergeRequestResult(
        id=98765,
        link="https://gitlab.example.com/g/r/-/merge_requests/12",
        target_branch="uat",
        title="[uat] x",
    )


def test_submit_failure(manager, fake_gitlab):
    """Test creation failures surface as SubmissionError."""
    fake_gitlab.fail_on(1, httpx.ConnectError("boom"))

    with pytest.raises(SubmissionError) as exc_info:
        manager.submit_merge_request(7, "feature", "uat", "[uat] x")

    assert exc_info.value.kind == ErrorKind.TRANSPORT
    assert exc_info.value.endpoint == "https://gitlab.example.com/api/v4/projects/7/merge_requests"
