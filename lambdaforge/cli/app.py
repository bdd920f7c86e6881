"""Main Typer application — imports and registers all CLI commands.

Entry point: ``lambdaforge`` (configured via pyproject.toml project.scripts).

Commands: create, update, set-stage, history.
"""

from __future__ import annotations

import typer

from lambdaforge import __version__
from lambdaforge.cli import support
from lambdaforge.cli.commands.create import create_cmd
from lambdaforge.cli.commands.history import history_cmd
from lambdaforge.cli.commands.set_stage import set_stage_cmd
from lambdaforge.cli.commands.update import update_cmd

app = typer.Typer(
    name="lambdaforge",
    help="Lambdaforge: create, update and stage an AWS Lambda function from a JSON spec.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="create", help="Creates a new lambda function.")(create_cmd)
app.command(name="update", help="Updates an existing lambda function.")(update_cmd)
app.command(
    name="set-stage",
    help="Sets the stage for a lambda function to point to a particular version.",
)(set_stage_cmd)
app.command(name="history", help="Shows the deployment history of a lambda function.")(history_cmd)


def _version_callback(value: bool) -> None:
    if value:
        support.console.print(f"lambdaforge {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every external command."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Configure logging before any command runs."""
    settings = support.settings()
    support.configure_logging("DEBUG" if verbose else settings.effective_log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
