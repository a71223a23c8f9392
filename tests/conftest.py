"""Shared fixtures: a fake GitLab API served through httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from gitlab_util.gitlab import GitLabClient
from gitlab_util.manager import GitLabManager

GITLAB_URL = "https://gitlab.example.com"
TOKEN = "test-token"


class FakeGitLab:
    """Answers project lookups and merge request creation, recording every request.

    ``failures`` maps a 1-based call number to the response (or exception)
    returned instead of the default one.
    """

    def __init__(self, project_id: int = 7) -> None:
        self.project_id = project_id
        self.requests: list[httpx.Request] = []
        self.failures: dict[int, httpx.Response | Exception] = {}
        self._next_mr_id = 100

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(method, raw path) of every request, in order."""
        return [(r.method, r.url.raw_path.decode()) for r in self.requests]

    def fail_on(self, call_number: int, response: httpx.Response | Exception) -> None:
        self.failures[call_number] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        failure = self.failures.get(len(self.requests))
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return failure

        if request.method == "GET":
            return httpx.Response(
                200,
                json={
                    "id": self.project_id,
                    "name": "repo",
                    "path_with_namespace": "group/repo",
                    "web_url": f"{GITLAB_URL}/group/repo",
                    "forks_count": 0,
                },
            )

        body = json.loads(request.content)
        self._next_mr_id += 1
        return httpx.Response(
            201,
            json={
                "id": self._next_mr_id,
                "iid": self._next_mr_id - 100,
                "title": body["title"],
                "source_branch": body["source_branch"],
                "target_branch": body["target_branch"],
                "state": "opened",
                "web_url": f"{GITLAB_URL}/group/repo/-/merge_requests/{self._next_mr_id - 100}",
            },
        )


@pytest.fixture
def fake_gitlab() -> FakeGitLab:
    return FakeGitLab()


@pytest.fixture
def client(fake_gitlab):
    with GitLabClient(GITLAB_URL, TOKEN, transport=fake_gitlab.transport) as gitlab_client:
        yield gitlab_client


@pytest.fixture
def manager(client) -> GitLabManager:
    return GitLabManager(client)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's GitLab settings."""
    for name in ("GITLAB_URL", "GITLAB_PRIVATE_TOKEN", "GITLAB_TOKEN", "GITLAB_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("gitlab_util.config.load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.chdir(tmp_path)
