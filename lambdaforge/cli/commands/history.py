"""``lambdaforge history SPEC`` — show the deployment history of a spec."""

from __future__ import annotations

from pathlib import Path

import typer

from lambdaforge.cli import support
from lambdaforge.cli.render import render_history
from lambdaforge.core.errors import MissingHistoryError, NotFoundError
from lambdaforge.core.history_store import history_path_for, load_history
from lambdaforge.core.spec_store import load_spec


def history_cmd(
    spec: Path = typer.Argument(
        None,
        help="Path to the lambda spec JSON file.",
        show_default=False,
    ),
) -> None:
    """Show the deployments and stage pointers recorded for SPEC."""
    with support.deploy_errors():
        spec_path = support.require_spec(spec)
        function_spec = load_spec(spec_path)
        path = history_path_for(spec_path.resolve(), support.settings().history_suffix)
        try:
            history = load_history(path)
        except NotFoundError as exc:
            raise MissingHistoryError(
                f"no deployment history at {path}; run create first", step="load-history"
            ) from exc
    support.console.print(render_history(history, function_name=function_spec.function_name))
