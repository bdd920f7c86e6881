"""Deployment orchestrator — create, update and set-stage flows.

The DeploymentOrchestrator sequences the packaging, upload and remote
function calls for one spec, and keeps three pieces of state consistent:
the spec file (which records the function ARN), the history file (which
records every deployment and stage pointer) and the remote function.

Rules:
- Local preconditions (spec, identity, history, deploying user) are all
  checked before the first external call.
- The first failing external call stops the flow. Nothing is retried or
  rolled back.
- Once the remote function has changed, later failures are raised as
  ``PartialFailureError``. Local state is first brought up to date with
  whatever did happen remotely, where that is still possible.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from lambdaforge.backends.protocols import (
    FunctionService,
    ObjectStore,
    PackageBuilder,
    UserResolver,
)
from lambdaforge.config import LambdaforgeSettings
from lambdaforge.core import history_store
from lambdaforge.core.errors import (
    AlreadyExistsError,
    DeployError,
    ExternalCallError,
    MissingHistoryError,
    MissingIdentityError,
    NotFoundError,
    PartialFailureError,
    UsageError,
)
from lambdaforge.core.spec_store import load_spec, save_spec
from lambdaforge.core.versions import iter_version_pages, latest_version
from lambdaforge.models.history import DeploymentHistory, DeploymentRecord
from lambdaforge.models.options import DeployOptions
from lambdaforge.models.remote import AliasPointer, CodeLocation
from lambdaforge.models.results import CreateResult, StageResult, UpdateResult
from lambdaforge.models.spec import FunctionSpec

logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Runs deployment flows for the spec at *spec_path*.

    Parameters
    ----------
    spec_path:
        Path to the function spec file.
    package_builder, object_store, function_service, user_resolver:
        External collaborators. See ``lambdaforge.backends.protocols``.
    history_suffix:
        Suffix that turns the spec file name into the history file name.
    clock:
        Returns the current time in seconds; used to name new archives.
    """

    def __init__(
        self,
        spec_path: Path,
        *,
        package_builder: PackageBuilder,
        object_store: ObjectStore,
        function_service: FunctionService,
        user_resolver: UserResolver,
        history_suffix: str = history_store.DEFAULT_HISTORY_SUFFIX,
        clock: Callable[[], float] = time.time,
    ) -> None:
        # symlinked specs are followed; history lives next to the real file
        self.spec_path = Path(spec_path).resolve()
        self.history_path = history_store.history_path_for(self.spec_path, history_suffix)
        self.package_builder = package_builder
        self.object_store = object_store
        self.functions = function_service
        self.user_resolver = user_resolver
        self._clock = clock

    @classmethod
    def with_cli_backends(
        cls,
        spec_path: Path,
        options: DeployOptions,
        settings: LambdaforgeSettings,
        *,
        workdir: Path | None = None,
    ) -> DeploymentOrchestrator:
        """Wire the orchestrator to the npm, zip, aws and git command-line tools."""
        from lambdaforge.backends import (
            AwsCli,
            AwsCliFunctionService,
            AwsCliObjectStore,
            CommandRunner,
            GitUserResolver,
            NpmPackageBuilder,
        )

        runner = CommandRunner(timeout=settings.command_timeout_seconds, cwd=workdir)
        aws = AwsCli(
            runner,
            executable=settings.aws_cli,
            profile=options.profile or settings.default_profile,
            region=options.region or settings.default_region,
        )
        return cls(
            spec_path,
            package_builder=NpmPackageBuilder(
                runner, npm=settings.npm_cli, zip_executable=settings.zip_cli, workdir=workdir
            ),
            object_store=AwsCliObjectStore(aws),
            function_service=AwsCliFunctionService(aws),
            user_resolver=GitUserResolver(runner, executable=settings.git_cli, key=settings.git_user_key),
            history_suffix=settings.history_suffix,
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, options: DeployOptions) -> CreateResult:
        """Create the remote function, record its ARN and start its history.

        Lifecycle:
        1. Refuse if the spec already carries an ARN
        2. Package and upload (unless skipped)
        3. create-function
        4. Stamp the ARN into the spec
        5. Create the stage alias, if a stage was given
        6. Write a fresh history with one deployment record
        """
        spec = load_spec(self.spec_path)
        if spec.has_identity:
            raise AlreadyExistsError(
                f"function '{spec.function_name}' already exists as {spec.function_arn}; "
                "use update instead",
                step="create-function",
            )
        user = self.user_resolver.current_user()

        code, uploaded, _ = self._prepare_code(spec, options, history=None)

        logger.info("Creating lambda function '%s'...", spec.function_name)
        publication = self.functions.create_function(spec.lambdaconfig, code, spec.vpcconfig)
        logger.info("Lambda function created with resource ARN '%s'", publication.arn)
        completed = ["create-function"]

        spec = spec.with_arn(publication.arn)
        self._persist_spec(spec, completed)
        completed.append("save-spec")

        history = history_store.new_history(
            DeploymentRecord(
                lambda_version=publication.version,
                module_version=spec.version,
                date=publication.last_modified,
                user=user,
            )
        )

        if options.stage:
            logger.info(
                "Creating alias '%s' for lambda function '%s' version '%s'",
                options.stage, spec.function_name, publication.version,
            )
            try:
                pointer = self.functions.create_alias(
                    publication.arn, options.stage, publication.version
                )
            except ExternalCallError as exc:
                self._persist_history(history, completed)
                completed.append("save-history")
                raise PartialFailureError(
                    f"function '{spec.function_name}' was created as version "
                    f"{publication.version} but alias '{options.stage}' could not be "
                    f"created: {exc.message}",
                    step="create-alias",
                    completed=completed,
                ) from exc
            completed.append("create-alias")
            history = history_store.point_alias(
                history, options.stage, pointer.function_version, created=True
            )

        self._persist_history(history, completed)

        return CreateResult(
            function_name=spec.function_name,
            function_arn=publication.arn,
            version=publication.version,
            storage_key=code.key,
            uploaded=uploaded,
            stage=options.stage,
            history_path=self.history_path,
        )

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, options: DeployOptions) -> UpdateResult:
        """Publish new code and configuration and append a deployment record.

        Lifecycle:
        1. Require the spec's ARN and an existing history
        2. Package and upload (unless skipped)
        3. update-function-code
        4. update-function-configuration, with a filtered configuration view
        5. Append the deployment record to history
        """
        spec = load_spec(self.spec_path)
        self._require_identity(spec, step="update-function-code")
        history = self._require_history(step="update-function-code")
        user = self.user_resolver.current_user()

        code, uploaded, archive = self._prepare_code(spec, options, history=history)

        logger.info("Updating lambda function '%s'...", spec.function_name)
        publication = self.functions.update_function_code(
            spec.function_arn, code, publish=spec.publish
        )
        completed = ["update-function-code"]

        if publication.version in history.deployed_versions():
            logger.warning(
                "Version '%s' is already recorded in %s; set Publish in lambdaconfig "
                "to get a new version per deployment",
                publication.version, self.history_path,
            )

        record = DeploymentRecord(
            lambda_version=publication.version,
            module_version=spec.version,
            deployment_package=archive,
            date=publication.last_modified,
            user=user,
        )
        history = history_store.append(history, record)

        try:
            self.functions.update_function_configuration(
                spec.function_arn, spec.configuration_view(), spec.vpcconfig
            )
        except ExternalCallError as exc:
            self._persist_history(history, completed)
            completed.append("save-history")
            raise PartialFailureError(
                f"code for '{spec.function_name}' is live as version {publication.version} "
                f"but its configuration is stale: {exc.message}",
                step="update-function-configuration",
                completed=completed,
            ) from exc
        completed.append("update-function-configuration")
        logger.info("Lambda function updated")

        self._persist_history(history, completed)

        return UpdateResult(
            function_name=spec.function_name,
            function_arn=spec.function_arn,
            record=record,
            storage_key=code.key,
            uploaded=uploaded,
            history_path=self.history_path,
        )

    # ------------------------------------------------------------------
    # Set stage
    # ------------------------------------------------------------------

    def set_stage(self, options: DeployOptions, version: str | None = None) -> StageResult:
        """Point the ``options.stage`` alias at *version* and record it in history.

        Without an explicit *version*, the most recent published version is
        used (see ``lambdaforge.core.versions``).
        """
        stage = options.stage
        if not stage:
            raise UsageError("No stage given", step="set-stage")

        spec = load_spec(self.spec_path)
        self._require_identity(spec, step="set-stage")
        history = self._require_history(step="set-stage")
        arn = spec.function_arn

        if version is None:
            logger.info("Resolving the latest version of '%s'...", spec.function_name)
            version = latest_version(iter_version_pages(self.functions, arn))

        created = stage not in self.functions.list_aliases(arn)
        pointer: AliasPointer
        if created:
            logger.info("Creating stage '%s' at version '%s'", stage, version)
            pointer = self.functions.create_alias(arn, stage, version)
        else:
            logger.info("Moving stage '%s' to version '%s'", stage, version)
            pointer = self.functions.update_alias(arn, stage, version)
        completed = ["create-alias" if created else "update-alias"]

        history = history_store.point_alias(history, stage, version, created=created)
        self._persist_history(history, completed)
        logger.info("Lambda stage '%s' set to point to version '%s'", pointer.name, version)

        return StageResult(
            function_arn=arn,
            stage=stage,
            version=version,
            created=created,
            history_path=self.history_path,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def load_history(self) -> DeploymentHistory:
        return history_store.load_history(self.history_path)

    def _require_identity(self, spec: FunctionSpec, *, step: str) -> None:
        if not spec.has_identity:
            raise MissingIdentityError(
                f"spec {self.spec_path} has no lambdaconfig.FunctionArn; "
                f"create the function '{spec.function_name}' first",
                step=step,
            )

    def _require_history(self, *, step: str) -> DeploymentHistory:
        try:
            return history_store.load_history(self.history_path)
        except NotFoundError as exc:
            raise MissingHistoryError(
                f"deployment history {self.history_path} does not exist", step=step
            ) from exc

    def _prepare_code(
        self,
        spec: FunctionSpec,
        options: DeployOptions,
        *,
        history: DeploymentHistory | None,
    ) -> tuple[CodeLocation, bool, str]:
        """Package and upload a new archive, or pick the existing one to reuse.

        Returns the code location, whether an upload happened and the
        archive name.
        """
        if options.skip_upload:
            archive = (history.last_package() if history else None) or f"{spec.zipfile}.zip"
            logger.info("Skipping package and upload; using '%s'", spec.storage_key(archive))
            return CodeLocation(bucket=spec.s3bucket, key=spec.storage_key(archive)), False, archive

        archive = f"{spec.zipfile}_{int(self._clock() * 1000)}.zip"
        key = spec.storage_key(archive)
        local_path = self.package_builder.build(spec, archive)
        logger.info("Uploading '%s' to '%s' with key '%s'...", archive, spec.s3bucket, key)
        self.object_store.upload(spec.s3bucket, key, local_path)
        return CodeLocation(bucket=spec.s3bucket, key=key), True, archive

    def _persist_spec(self, spec: FunctionSpec, completed: list[str]) -> None:
        try:
            save_spec(self.spec_path, spec)
        except (OSError, DeployError) as exc:
            logger.error("Function %s exists remotely but the spec was not updated", spec.function_arn)
            raise PartialFailureError(
                f"function was created as {spec.function_arn} but {self.spec_path} "
                f"could not be updated: {exc}",
                step="save-spec",
                completed=completed,
            ) from exc

    def _persist_history(self, history: DeploymentHistory, completed: list[str]) -> None:
        try:
            history_store.save_history(self.history_path, history)
        except (OSError, DeployError) as exc:
            logger.error("Remote state changed but %s was not written", self.history_path)
            raise PartialFailureError(
                f"remote function changed ({', '.join(completed)}) but "
                f"{self.history_path} could not be written: {exc}",
                step="save-history",
                completed=completed,
            ) from exc
