"""``lambdaforge set-stage SPEC STAGE [VERSION]`` — point a stage alias at a version."""

from __future__ import annotations

from pathlib import Path

import typer

from lambdaforge.cli import support
from lambdaforge.cli.render import print_stage_result
from lambdaforge.core.errors import UsageError
from lambdaforge.models.options import DeployOptions


def set_stage_cmd(
    spec: Path = typer.Argument(
        None,
        help="Path to the lambda spec JSON file.",
        show_default=False,
    ),
    stage: str = typer.Argument(
        None,
        help="The stage alias to create or move.",
        show_default=False,
    ),
    version: str = typer.Argument(
        None,
        help="Function version to point at. Defaults to the latest published version.",
        show_default=False,
    ),
    profile: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="The local AWS profile to use.",
    ),
    region: str = typer.Option(
        None,
        "--region",
        "-r",
        help="The region in which the function lives.",
    ),
) -> None:
    """Set STAGE of the function in SPEC to VERSION."""
    with support.deploy_errors():
        spec_path = support.require_spec(spec)
        stage = (stage or "").strip()
        if not stage:
            raise UsageError("No stage given", step="arguments")
        version = version.strip() if version and version.strip() else None
        options = DeployOptions(stage=stage, profile=profile, region=region)
        orchestrator = support.build_orchestrator(spec_path, options)
        result = orchestrator.set_stage(options, version)
    print_stage_result(support.console, result)
