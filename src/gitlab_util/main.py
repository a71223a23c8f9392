"""Main CLI application entry point."""

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .commands.init_config import init_config
from .commands.merge_requests import mr_app

app = typer.Typer(
    name="gitlab-util",
    help="Utilities for GitLab",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(mr_app)
app.command(name="init-config")(init_config)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"gitlab-util version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Utilities for GitLab: create merge requests into several target branches at once."""
    pass


@app.command()
def info() -> None:
    """Show information about the CLI tool."""
    table = Table(title="gitlab-util Info")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Version", __version__)
    table.add_row("Description", "Utilities for GitLab")
    table.add_row("Python Package", "gitlab-util")
    table.add_row("Token variable", "GITLAB_PRIVATE_TOKEN")

    console.print(table)


if __name__ == "__main__":
    app()
