"""Rich renderers for flow results and deployment history."""

from __future__ import annotations

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lambdaforge.models.history import DeploymentHistory
from lambdaforge.models.results import CreateResult, StageResult, UpdateResult


def _panel(title: str, lines: list[str]) -> Panel:
    return Panel(
        "\n".join(lines),
        title=f"[bold]{title}[/bold]",
        border_style="green",
        padding=(1, 2),
    )


def print_create_result(console: Console, result: CreateResult) -> None:
    lines = [
        "[bold green]Lambda function created![/bold green]",
        "",
        f"[bold]Function:[/bold]  {escape(result.function_name)}",
        f"[bold]ARN:[/bold]       {escape(result.function_arn)}",
        f"[bold]Version:[/bold]   {escape(result.version)}",
        f"[bold]Code:[/bold]      {escape(result.storage_key)}"
        + ("" if result.uploaded else " [dim](existing)[/dim]"),
    ]
    if result.stage:
        lines.append(f"[bold]Stage:[/bold]     {escape(result.stage)}")
    lines += ["", f"[dim]History written to {escape(str(result.history_path))}[/dim]"]
    console.print(_panel("Create", lines))


def print_update_result(console: Console, result: UpdateResult) -> None:
    record = result.record
    lines = [
        "[bold green]Lambda function updated![/bold green]",
        "",
        f"[bold]Function:[/bold]        {escape(result.function_name)}",
        f"[bold]Version:[/bold]         {escape(record.lambda_version)}",
        f"[bold]Module version:[/bold]  {escape(record.module_version or '-')}",
        f"[bold]Code:[/bold]            {escape(result.storage_key)}"
        + ("" if result.uploaded else " [dim](existing)[/dim]"),
        "",
        f"[dim]Deployment appended to {escape(str(result.history_path))}[/dim]",
    ]
    console.print(_panel("Update", lines))


def print_stage_result(console: Console, result: StageResult) -> None:
    action = "created" if result.created else "moved"
    console.print(
        f"[bold green]Stage '{escape(result.stage)}' {action}[/bold green] "
        f"-> version [bold]{escape(result.version)}[/bold]"
    )


def render_history(history: DeploymentHistory, *, function_name: str) -> Panel:
    """Render the deployments and stage pointers of a history as one Panel."""
    deployments = Table(show_header=True, header_style="bold cyan", expand=True)
    deployments.add_column("#", style="dim", justify="right", width=4)
    deployments.add_column("Version", justify="right")
    deployments.add_column("Module")
    deployments.add_column("Package")
    deployments.add_column("Date")
    deployments.add_column("User")

    stage_by_version: dict[str, list[str]] = {}
    for stage, pointer in history.aliases.items():
        stage_by_version.setdefault(pointer.current, []).append(stage)

    for i, record in enumerate(history.versions):
        version = escape(record.lambda_version)
        stages = stage_by_version.get(record.lambda_version)
        if stages:
            version += f" [magenta]({escape(', '.join(sorted(stages)))})[/magenta]"
        deployments.add_row(
            str(i),
            version,
            escape(record.module_version or "-"),
            escape(record.deployment_package or "-"),
            escape(record.date or "-"),
            escape(record.user or "-"),
        )

    stages = Table(show_header=True, header_style="bold cyan", expand=True)
    stages.add_column("Stage")
    stages.add_column("Current", justify="right")
    stages.add_column("Versions")
    for stage, pointer in sorted(history.aliases.items()):
        stages.add_row(
            f"[magenta]{escape(stage)}[/magenta]",
            escape(pointer.current),
            escape(", ".join(pointer.versions)),
        )
    if not history.aliases:
        stages.add_row("[dim]none[/dim]", "", "")

    return Panel(
        Group(deployments, Text(""), stages),
        title=f"[bold]{escape(function_name)}[/bold]",
        subtitle=f"{len(history.versions)} deployment(s)",
        border_style="blue",
        padding=(1, 2),
    )
