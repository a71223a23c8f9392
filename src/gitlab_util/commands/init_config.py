"""Init config command for generating default configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from gitlab_util.config import create_default_config

console = Console()
logger = logging.getLogger(__name__)


def init_config(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file (default: .gitlab-util.yml)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing config file",
    ),
) -> None:
    """Generate a default configuration file."""
    config_path = Path(output) if output else Path.cwd() / ".gitlab-util.yml"

    if config_path.exists() and not force:
        console.print(f"[red]Configuration file already exists: {config_path}[/red]", soft_wrap=True)
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    try:
        with config_path.open("w", encoding="utf-8") as f:
            f.write(create_default_config())
    except OSError as e:
        console.print(f"[red]Failed to create configuration file: {e}[/red]", soft_wrap=True)
        raise typer.Exit(1) from e

    logger.info("Wrote default configuration to %s", config_path)
    console.print(f"[green]✓[/green] Created configuration file: {config_path}", soft_wrap=True)
    console.print("\n[dim]Export GITLAB_PRIVATE_TOKEN before running gitlab-util merge-request create.[/dim]")
