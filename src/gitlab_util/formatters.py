"""Output formatters for merge request batch reports."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from . import __version__
from .orchestrator import BatchReport, BranchOutcome

logger = logging.getLogger(__name__)


class BaseFormatter:
    """Base class for output formatters."""

    def format(self, report: BatchReport, **_kwargs: Any) -> str:
        """Format a batch report."""
        raise NotImplementedError


class JSONFormatter(BaseFormatter):
    """JSON output formatter."""

    def format(self, report: BatchReport, **_kwargs: Any) -> str:
        """Format the report as JSON."""
        logger.debug("Formatting %d outcomes as JSON", len(report.outcomes))

        output = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "tool": {"name": "gitlab-util", "version": __version__},
            "summary": {
                "attempted": len(report.outcomes),
                "created": len(report.succeeded),
                "failed": len(report.failed),
            },
            "results": [self._format_outcome(outcome) for outcome in report.outcomes],
        }

        return json.dumps(output, indent=2, ensure_ascii=False)

    def _format_outcome(self, outcome: BranchOutcome) -> dict[str, Any]:
        formatted: dict[str, Any] = {
            "target_branch": outcome.target_branch,
            "status": "created" if outcome.ok else "failed",
        }

        if outcome.result is not None:
            formatted["id"] = outcome.result.id
            formatted["link"] = outcome.result.link
            formatted["title"] = outcome.result.title

        if outcome.error is not None:
            formatted["error"] = {
                "kind": outcome.error.kind.value,
                "method": outcome.error.method,
                "endpoint": outcome.error.endpoint,
                "status_code": outcome.error.status_code,
                "message": outcome.error.message,
            }

        return formatted


class JUnitFormatter(BaseFormatter):
    """JUnit XML output formatter for CI integration."""

    def format(self, report: BatchReport, **_kwargs: Any) -> str:
        """Format the report as JUnit XML, one test case per target branch."""
        logger.debug("Formatting %d outcomes as JUnit XML", len(report.outcomes))

        xml_lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<testsuite name="gitlab-util merge-request create" tests="{len(report.outcomes)}" '
            f'failures="{len(report.failed)}" errors="0" time="0">',
        ]

        for outcome in report.outcomes:
            branch = self._escape_xml(outcome.target_branch)
            xml_lines.append(f'  <testcase classname="merge-request" name="{branch}" time="0">')

            if outcome.error is not None:
                error = outcome.error
                xml_lines.extend(
                    [
                        f'    <failure message="{self._escape_xml(error.message)}" type="{error.kind.value}">',
                        f"      <![CDATA[{error.method} {error.endpoint}",
                        f"Status: {error.status_code}]]>",
                        "    </failure>",
                    ]
                )
            elif outcome.result is not None:
                xml_lines.append(f"    <system-out>{self._escape_xml(outcome.result.link)}</system-out>")

            xml_lines.append("  </testcase>")

        xml_lines.append("</testsuite>")
        return "\n".join(xml_lines)

    def _escape_xml(self, text: str) -> str:
        """Escape XML special characters."""
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;")
        )


class FormatterRegistry:
    """Registry for output formatters."""

    def __init__(self) -> None:
        self._formatters: dict[str, BaseFormatter] = {"json": JSONFormatter(), "junit": JUnitFormatter()}

    def get_formatter(self, format_name: str) -> BaseFormatter | None:
        """Get formatter by name."""
        return self._formatters.get(format_name.lower())

    def list_formats(self) -> list[str]:
        """List available formats."""
        return list(self._formatters.keys())

    def register_formatter(self, name: str, formatter: BaseFormatter) -> None:
        """Register a custom formatter."""
        self._formatters[name.lower()] = formatter


# Global formatter registry
formatter_registry = FormatterRegistry()
