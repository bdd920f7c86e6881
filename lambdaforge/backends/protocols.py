"""Capability Protocols for the external collaborators of a deployment.

The orchestrator only talks to these Protocols. The shipped backends shell
out to the ``npm``/``zip``/``aws``/``git`` command-line tools; tests
substitute in-memory fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from lambdaforge.models.remote import AliasPointer, CodeLocation, FunctionPublication, VersionPage
from lambdaforge.models.spec import FunctionSpec, VpcConfig


@runtime_checkable
class PackageBuilder(Protocol):
    """Produces a deployable archive on local disk."""

    def build(self, spec: FunctionSpec, archive: str) -> Path:
        """Build the archive named *archive* and return its local path."""
        ...


@runtime_checkable
class ObjectStore(Protocol):
    """Synchronous blob upload."""

    def upload(self, bucket: str, key: str, path: Path) -> None:
        ...


@runtime_checkable
class FunctionService(Protocol):
    """Control API of the remote compute platform.

    Every method is synchronous and raises ``ExternalCallError`` on failure.
    *function* is a function name or ARN.
    """

    def create_function(
        self,
        configuration: dict[str, Any],
        code: CodeLocation,
        vpc: VpcConfig | None = None,
    ) -> FunctionPublication:
        ...

    def update_function_code(
        self,
        function: str,
        code: CodeLocation,
        *,
        publish: bool = False,
    ) -> FunctionPublication:
        ...

    def update_function_configuration(
        self,
        function: str,
        configuration: dict[str, Any],
        vpc: VpcConfig | None = None,
    ) -> None:
        ...

    def list_versions(self, function: str, *, marker: str | None = None) -> VersionPage:
        ...

    def list_aliases(self, function: str) -> list[str]:
        """Return the names of the aliases defined on *function*."""
        ...

    def create_alias(self, function: str, name: str, version: str) -> AliasPointer:
        ...

    def update_alias(self, function: str, name: str, version: str) -> AliasPointer:
        ...


@runtime_checkable
class UserResolver(Protocol):
    """Identifies the operator performing the deployment."""

    def current_user(self) -> str:
        ...
