"""``lambdaforge update SPEC`` — deploy new code and configuration."""

from __future__ import annotations

from pathlib import Path

import typer

from lambdaforge.cli import support
from lambdaforge.cli.render import print_update_result
from lambdaforge.models.options import DeployOptions


def update_cmd(
    spec: Path = typer.Argument(
        None,
        help="Path to the lambda spec JSON file.",
        show_default=False,
    ),
    skip_upload: bool = typer.Option(
        False,
        "--skip-upload",
        "-n",
        help="Skip creating a local zip file and uploading it to S3.",
    ),
    profile: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="The local AWS profile to deploy with.",
    ),
    region: str = typer.Option(
        None,
        "--region",
        "-r",
        help="The region in which the function lives.",
    ),
) -> None:
    """Update an existing Lambda function from SPEC.

    The function must have been created with ``lambdaforge create`` so that
    the spec carries its ARN and a deployment history exists.
    """
    with support.deploy_errors():
        spec_path = support.require_spec(spec)
        options = DeployOptions(skip_upload=skip_upload, profile=profile, region=region)
        orchestrator = support.build_orchestrator(spec_path, options)
        result = orchestrator.update(options)
    print_update_result(support.console, result)
