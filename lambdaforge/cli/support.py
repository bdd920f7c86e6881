"""Shared plumbing for the CLI commands: consoles, logging and error exit."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from lambdaforge.config import LambdaforgeSettings, config
from lambdaforge.core.errors import DeployError, PartialFailureError, UsageError
from lambdaforge.core.orchestrator import DeploymentOrchestrator
from lambdaforge.models.options import DeployOptions

console = Console()
err_console = Console(stderr=True)


def settings() -> LambdaforgeSettings:
    return config


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def build_orchestrator(spec: Path, options: DeployOptions) -> DeploymentOrchestrator:
    """Construct the orchestrator wired to the command-line backends."""
    return DeploymentOrchestrator.with_cli_backends(spec, options, settings())


def require_spec(spec: Path | None) -> Path:
    if spec is None:
        raise UsageError("No lambda spec given", step="arguments")
    return spec


@contextmanager
def deploy_errors() -> Iterator[None]:
    """Report any ``DeployError`` on stderr and exit with status 1."""
    try:
        yield
    except DeployError as exc:
        step = f" during {exc.step}" if exc.step else ""
        err_console.print(f"[bold red]Error{step}:[/bold red] {escape(exc.message)}")
        if isinstance(exc, PartialFailureError):
            done = ", ".join(exc.completed) or "nothing"
            err_console.print(
                f"[yellow]Completed before the failure:[/yellow] {escape(done)}\n"
                "[dim]Local and remote state are out of step; reconcile them manually.[/dim]"
            )
        raise typer.Exit(code=1)
