"""Merge request-related commands."""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from gitlab_util.config import ConfigLoader
from gitlab_util.errors import ApiError, ConfigurationError, ErrorKind, ProjectLookupError
from gitlab_util.formatters import formatter_registry
from gitlab_util.orchestrator import BatchReport, BranchOutcome, FailurePolicy, MergeRequestSpec
from gitlab_util.registry import Registry

console = Console()
logger = logging.getLogger(__name__)

mr_app = typer.Typer(
    name="merge-request",
    help="Manage GitLab merge requests",
    no_args_is_help=True,
)

ERROR_HEADLINES = {
    ErrorKind.TRANSPORT: "could not reach GitLab",
    ErrorKind.STATUS: "GitLab rejected the request",
    ErrorKind.DECODE: "unexpected response from GitLab",
}


def split_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated option value, dropping blanks."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@mr_app.command("create")
def create_merge_request(
    repository: str = typer.Option(..., "--repository", "-r", help="Repository path, e.g. group/project"),
    source_branch: str = typer.Option(..., "--source-branch", "-s", help="Source branch"),
    target_branches: str = typer.Option(
        ..., "--target-branches", "-t", help="Comma-separated target branches, processed in order"
    ),
    title: str = typer.Option(..., "--title", help="MR title, without ticket or branch tags"),
    description: str = typer.Option("", "--description", "-d", help="MR description"),
    tickets: str | None = typer.Option(
        None, "--tickets", "--jira", "-j", help="Comma-separated ticket ids prepended to the title"
    ),
    on_error: FailurePolicy | None = typer.Option(
        None,
        "--on-error",
        case_sensitive=False,
        help="Stop at the first failed branch (abort) or attempt all of them (continue)",
    ),
    output_format: str = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format (console, json, junit)",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
) -> None:
    """Create a merge request into each target branch."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    formatter = None
    if output_format != "console":
        formatter = formatter_registry.get_formatter(output_format)
        if formatter is None:
            available_formats = ", ".join(["console", *formatter_registry.list_formats()])
            console.print(f"[bold red]Unknown output format: {escape(output_format)}[/bold red]")
            console.print(f"Available formats: {available_formats}")
            raise typer.Exit(1)

    try:
        spec = MergeRequestSpec(
            repository=repository.strip(),
            source_branch=source_branch.strip(),
            target_branches=split_list(target_branches),
            title=title,
            description=description,
            ticket_ids=split_list(tickets),
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise typer.BadParameter(f"missing or empty value for: {fields}") from e

    try:
        gitlab_config = ConfigLoader().load_config(config)
        if on_error is not None:
            gitlab_config = gitlab_config.model_copy(update={"on_error": on_error})

        on_outcome = _display_outcome if formatter is None else None
        with Registry(gitlab_config, on_outcome=on_outcome) as registry:
            report = registry.merge_request_creator.create_batch(spec)
    except ConfigurationError as e:
        console.print(f"[bold red]error[/bold red]: {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e

    if formatter is not None:
        console.print(formatter.format(report), markup=False, highlight=False, emoji=False, soft_wrap=True)
    else:
        _display_summary(report, len(spec.target_branches))

    if not report.ok:
        raise typer.Exit(1)


def _display_outcome(outcome: BranchOutcome) -> None:
    """Print one branch's outcome as soon as it is known."""
    if outcome.result is not None:
        console.print(
            f"[green]✓[/green] {escape(outcome.target_branch)}: "
            f"!{outcome.result.id} {escape(outcome.result.link)}",
            soft_wrap=True,
        )
        console.print(f"  [dim]title:[/dim] {escape(outcome.result.title or '')}", soft_wrap=True)
    elif outcome.error is not None:
        _display_error(outcome.target_branch, outcome.error)


def _display_error(target_branch: str, error: ApiError) -> None:
    """Print an API error in cargo style."""
    stage = "project lookup" if isinstance(error, ProjectLookupError) else "merge request creation"
    console.print(
        f"[bold red]error[/bold red]: {stage} for {escape(target_branch)} failed: {ERROR_HEADLINES[error.kind]}",
        soft_wrap=True,
    )
    status = f" ({error.status_code})" if error.status_code else ""
    console.print(f"  [dim]-->[/dim] {error.method} {escape(error.endpoint)}{status}", soft_wrap=True)
    if error.message:
        console.print(f"  [dim]message:[/dim] {escape(error.message)}", soft_wrap=True)


def _display_summary(report: BatchReport, requested: int) -> None:
    """Display summary line."""
    created = len(report.succeeded)
    failed = len(report.failed)
    skipped = requested - len(report.outcomes)

    parts = [f"[green]{created} created[/green]"]
    if failed:
        parts.append(f"[bold red]{failed} failed[/bold red]")
    if skipped:
        parts.append(f"[yellow]{skipped} not attempted[/yellow]")

    console.print()
    console.print("  " + ", ".join(parts) + f" of {requested} target branch{'es' if requested != 1 else ''}")
