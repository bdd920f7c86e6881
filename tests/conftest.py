"""Shared test fixtures for Lambdaforge.

In-memory fakes stand in for the four backend Protocols, so no test ever
starts an ``npm``, ``zip``, ``aws`` or ``git`` process.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from lambdaforge.core.errors import ExternalCallError
from lambdaforge.core.orchestrator import DeploymentOrchestrator
from lambdaforge.models.remote import AliasPointer, CodeLocation, FunctionPublication, VersionPage
from lambdaforge.models.spec import FunctionSpec, VpcConfig

FUNCTION_ARN = "arn:aws:lambda:eu-central-1:123456789012:function:orders"
FIXED_NOW = 1_760_000_000.0  # archive suffix 1760000000000


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeFunctionService:
    """Records every call; publishes versions "1", "2", ... in order.

    ``failures`` maps an operation name to the error it should raise.
    ``version_pages`` is the listing served by ``list_versions``; page *i*
    (for i > 0) is requested with marker ``"m<i>"``.
    """

    def __init__(self, *, arn: str = FUNCTION_ARN) -> None:
        self.arn = arn
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, ExternalCallError] = {}
        self.aliases: dict[str, str] = {}
        self.version_pages: list[list[str]] = [["$LATEST", "1"]]
        self.next_version = 1

    def fail(self, operation: str, message: str = "boom") -> None:
        self.failures[operation] = ExternalCallError(message, step=operation)

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        if operation in self.failures:
            raise self.failures[operation]

    def _publish(self) -> FunctionPublication:
        version = str(self.next_version)
        self.next_version += 1
        return FunctionPublication(
            arn=self.arn,
            version=version,
            last_modified=f"2026-10-19T10:00:0{version}.000+0000",
        )

    def create_function(
        self, configuration: dict[str, Any], code: CodeLocation, vpc: VpcConfig | None = None
    ) -> FunctionPublication:
        self._record("create_function", configuration, code, vpc)
        return self._publish()

    def update_function_code(
        self, function: str, code: CodeLocation, *, publish: bool = False
    ) -> FunctionPublication:
        self._record("update_function_code", function, code, publish)
        return self._publish()

    def update_function_configuration(
        self, function: str, configuration: dict[str, Any], vpc: VpcConfig | None = None
    ) -> None:
        self._record("update_function_configuration", function, configuration, vpc)

    def list_versions(self, function: str, *, marker: str | None = None) -> VersionPage:
        self._record("list_versions", function, marker)
        index = int(marker[1:]) if marker else 0
        has_more = index + 1 < len(self.version_pages)
        return VersionPage(
            versions=self.version_pages[index],
            next_marker=f"m{index + 1}" if has_more else None,
        )

    def list_aliases(self, function: str) -> list[str]:
        self._record("list_aliases", function)
        return list(self.aliases)

    def create_alias(self, function: str, name: str, version: str) -> AliasPointer:
        self._record("create_alias", function, name, version)
        self.aliases[name] = version
        return AliasPointer(name=name, function_version=version)

    def update_alias(self, function: str, name: str, version: str) -> AliasPointer:
        self._record("update_alias", function, name, version)
        self.aliases[name] = version
        return AliasPointer(name=name, function_version=version)


class FakePackageBuilder:
    def __init__(self, workdir: Path) -> None:
        self.workdir = workdir
        self.built: list[str] = []

    def build(self, spec: FunctionSpec, archive: str) -> Path:
        self.built.append(archive)
        path = self.workdir / archive
        path.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
        return path


class FakeObjectStore:
    def __init__(self) -> None:
        self.uploads: list[tuple[str, str, Path]] = []

    def upload(self, bucket: str, key: str, path: Path) -> None:
        self.uploads.append((bucket, key, path))


class FakeUserResolver:
    def __init__(self, user: str = "octocat", error: ExternalCallError | None = None) -> None:
        self.user = user
        self.error = error

    def current_user(self) -> str:
        if self.error is not None:
            raise self.error
        return self.user


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def spec_document() -> dict[str, Any]:
    """A hand-authored spec, before the function has been created."""
    return {
        "zipfile": "orders",
        "s3bucket": "deploy-artifacts",
        "s3keyprefix": "lambda/orders/",
        "version": "1.4.0",
        "files": ["dist/**/*.js"],
        "lambdaconfig": {
            "FunctionName": "orders",
            "Runtime": "nodejs20.x",
            "Handler": "dist/index.handler",
            "Role": "arn:aws:iam::123456789012:role/orders-lambda",
            "MemorySize": 256,
            "Timeout": 30,
            "Publish": True,
        },
        "vpcconfig": {
            "SubnetIds": ["subnet-a", "subnet-b"],
            "SecurityGroupIds": ["sg-1"],
        },
        "owner": "payments-team",
    }


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    def _write(path: Path, document: Any) -> Path:
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def spec_path(tmp_path: Path, spec_document: dict[str, Any], write_json) -> Path:
    return write_json(tmp_path / "orders.json", spec_document)


@pytest.fixture
def created_spec_path(tmp_path: Path, spec_document: dict[str, Any], write_json) -> Path:
    """A spec whose function already exists, with a one-deployment history."""
    document = dict(spec_document)
    document["lambdaconfig"] = {**spec_document["lambdaconfig"], "FunctionArn": FUNCTION_ARN}
    path = write_json(tmp_path / "orders.json", document)
    write_json(
        tmp_path / "orders-history.json",
        {
            "versions": [
                {
                    "lambdaVersion": "1",
                    "moduleVersion": "1.3.0",
                    "date": "2026-10-01T09:00:00.000+0000",
                    "user": "octocat",
                }
            ],
            "aliases": {"prod": {"current": "1", "versions": ["1"]}},
        },
    )
    return path


@pytest.fixture
def functions() -> FakeFunctionService:
    return FakeFunctionService()


@pytest.fixture
def builder(tmp_path: Path) -> FakePackageBuilder:
    return FakePackageBuilder(tmp_path)


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def users() -> FakeUserResolver:
    return FakeUserResolver()


@pytest.fixture
def make_orchestrator(
    functions: FakeFunctionService,
    builder: FakePackageBuilder,
    object_store: FakeObjectStore,
    users: FakeUserResolver,
) -> Callable[[Path], DeploymentOrchestrator]:
    """Factory fixture: an orchestrator for *spec_path* wired to the fakes."""

    def _factory(spec_path: Path) -> DeploymentOrchestrator:
        return DeploymentOrchestrator(
            spec_path,
            package_builder=builder,
            object_store=object_store,
            function_service=functions,
            user_resolver=users,
            clock=lambda: FIXED_NOW,
        )

    return _factory
