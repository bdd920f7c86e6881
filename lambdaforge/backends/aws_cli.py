"""AWS CLI backends for the object store and the Lambda control API.

Every call is one ``aws`` process with ``--output json``. Credential
profile and region, when given, are appended to every command line.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from lambdaforge.backends.runner import CommandRunner
from lambdaforge.core.errors import ExternalCallError
from lambdaforge.models.remote import AliasPointer, CodeLocation, FunctionPublication, VersionPage
from lambdaforge.models.spec import VpcConfig

logger = logging.getLogger(__name__)


class AwsCli:
    """Thin command-line builder around the ``aws`` executable."""

    def __init__(
        self,
        runner: CommandRunner,
        *,
        executable: str = "aws",
        profile: str | None = None,
        region: str | None = None,
    ) -> None:
        self.runner = runner
        self.executable = executable
        self.profile = profile
        self.region = region

    def command(self, service: str, operation: str, *args: str) -> list[str]:
        argv = [self.executable, service, operation]
        if self.profile:
            argv += ["--profile", self.profile]
        if self.region:
            argv += ["--region", self.region]
        argv += list(args)
        argv += ["--output", "json"]
        return argv

    def call(self, service: str, operation: str, *args: str, step: str) -> dict[str, Any]:
        return self.runner.run_json(self.command(service, operation, *args), step=step)


class AwsCliObjectStore:
    """Uploads archives with ``aws s3api put-object``."""

    def __init__(self, cli: AwsCli) -> None:
        self.cli = cli

    def upload(self, bucket: str, key: str, path: Path) -> None:
        self.cli.call(
            "s3api", "put-object",
            "--bucket", bucket,
            "--key", key,
            "--body", str(Path(path).resolve()),
            step="upload",
        )


class AwsCliFunctionService:
    """Lambda control API over ``aws lambda ...``."""

    def __init__(self, cli: AwsCli) -> None:
        self.cli = cli

    # ------------------------------------------------------------------
    # Function code and configuration
    # ------------------------------------------------------------------

    def create_function(
        self,
        configuration: dict[str, Any],
        code: CodeLocation,
        vpc: VpcConfig | None = None,
    ) -> FunctionPublication:
        args = ["--code", code.to_shorthand()]
        if vpc is not None:
            args += ["--vpc-config", vpc.to_shorthand()]
        args += ["--cli-input-json", json.dumps(configuration)]
        response = self.cli.call("lambda", "create-function", *args, step="create-function")
        return _publication(response, step="create-function")

    def update_function_code(
        self,
        function: str,
        code: CodeLocation,
        *,
        publish: bool = False,
    ) -> FunctionPublication:
        args = [
            "--function-name", function,
            "--s3-bucket", code.bucket,
            "--s3-key", code.key,
        ]
        if publish:
            args.append("--publish")
        response = self.cli.call("lambda", "update-function-code", *args, step="update-function-code")
        return _publication(response, step="update-function-code")

    def update_function_configuration(
        self,
        function: str,
        configuration: dict[str, Any],
        vpc: VpcConfig | None = None,
    ) -> None:
        args = ["--function-name", function]
        if vpc is not None:
            args += ["--vpc-config", json.dumps(vpc.to_payload())]
        args += ["--cli-input-json", json.dumps(configuration)]
        self.cli.call(
            "lambda", "update-function-configuration", *args,
            step="update-function-configuration",
        )

    # ------------------------------------------------------------------
    # Versions and aliases
    # ------------------------------------------------------------------

    def list_versions(self, function: str, *, marker: str | None = None) -> VersionPage:
        # --no-paginate: one service page per call, so NextMarker is visible
        args = ["--function-name", function, "--no-paginate"]
        if marker:
            args += ["--marker", marker]
        response = self.cli.call("lambda", "list-versions-by-function", *args, step="list-versions")
        return VersionPage(
            versions=[entry["Version"] for entry in response.get("Versions", [])],
            next_marker=response.get("NextMarker"),
        )

    def list_aliases(self, function: str) -> list[str]:
        response = self.cli.call(
            "lambda", "list-aliases", "--function-name", function, step="list-aliases"
        )
        return [alias["Name"] for alias in response.get("Aliases", [])]

    def create_alias(self, function: str, name: str, version: str) -> AliasPointer:
        return self._alias("create-alias", function, name, version)

    def update_alias(self, function: str, name: str, version: str) -> AliasPointer:
        return self._alias("update-alias", function, name, version)

    def _alias(self, operation: str, function: str, name: str, version: str) -> AliasPointer:
        response = self.cli.call(
            "lambda", operation,
            "--function-name", function,
            "--name", name,
            "--function-version", version,
            step=operation,
        )
        return AliasPointer(
            name=response.get("Name", name),
            function_version=response.get("FunctionVersion", version),
        )


def _publication(response: dict[str, Any], *, step: str) -> FunctionPublication:
    try:
        return FunctionPublication(
            arn=response["FunctionArn"],
            version=response["Version"],
            last_modified=response.get("LastModified", ""),
        )
    except KeyError as exc:
        raise ExternalCallError(f"{step} response is missing {exc.args[0]}", step=step) from exc
