"""Tests for batch report formatters."""

import json

from gitlab_util.errors import ErrorKind, ProjectLookupError
from gitlab_util.formatters import JSONFormatter, JUnitFormatter, formatter_registry
from gitlab_util.manager import MergeRequestResult
from gitlab_util.orchestrator import BatchReport, BranchOutcome


def _report() -> BatchReport:
    return BatchReport(
        outcomes=[
            BranchOutcome(
                target_branch="uat",
                result=MergeRequestResult(id=1, link="https://g.example/mr/1", target_branch="uat", title="[uat] x"),
            ),
            BranchOutcome(
                target_branch="main",
                error=ProjectLookupError(
                    ErrorKind.STATUS, "https://g.example/api/v4/projects/a%2Fb", "GET", 404, "<not found>"
                ),
            ),
        ]
    )


def test_registry_formats():
    """Test the registry knows json and junit."""
    assert formatter_registry.list_formats() == ["json", "junit"]
    assert isinstance(formatter_registry.get_formatter("JSON"), JSONFormatter)
    assert formatter_registry.get_formatter("sarif") is None


def test_json_formatter():
    """Test JSON output carries results and structured errors."""
    data = json.loads(JSONFormatter().format(_report()))

    assert data["summary"] == {"attempted": 2, "created": 1, "failed": 1}
    assert data["results"][0] == {
        "target_branch": "uat",
        "status": "created",
        "id": 1,
        "link": "https://g.example/mr/1",
        "title": "[uat] x",
    }
    assert data["results"][1]["error"] == {
        "kind": "status",
        "method": "GET",
        "endpoint": "https://g.example/api/v4/projects/a%2Fb",
        "status_code": 404,
        "message": "<not found>",
    }


def test_junit_formatter():
    """Test JUnit output has one test case per branch and escapes messages."""
    output = JUnitFormatter().format(_report())

    assert 'tests="2" failures="1"' in output
    assert output.count("<testcase ") == 2
    assert 'message="&lt;not found&gt;" type="status"' in output
    assert "<system-out>https://g.example/mr/1</system-out>" in output
