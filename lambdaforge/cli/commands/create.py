"""``lambdaforge create SPEC`` — create the Lambda function described by a spec.

Packages and uploads the code (unless --skip-upload), creates the
function, stamps its ARN into the spec, optionally creates a stage alias,
and writes the deployment history next to the spec.
"""

from __future__ import annotations

from pathlib import Path

import typer

from lambdaforge.cli import support
from lambdaforge.cli.render import print_create_result
from lambdaforge.models.options import DeployOptions


def create_cmd(
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
    stage: str = typer.Option(
        None,
        "--stage",
        "-s",
        help="The stage alias to point at the new version.",
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
        help="The region in which to deploy the function.",
    ),
) -> None:
    """Create a new Lambda function from SPEC."""
    with support.deploy_errors():
        spec_path = support.require_spec(spec)
        options = DeployOptions(
            skip_upload=skip_upload, stage=stage, profile=profile, region=region
        )
        orchestrator = support.build_orchestrator(spec_path, options)
        result = orchestrator.create(options)
    print_create_result(support.console, result)
