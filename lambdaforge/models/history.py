"""Deployment history models (append-only ledger, one per spec).

On disk the history is ``{"versions": [...], "aliases": {...}}`` with the
camelCase record keys written by earlier releases of the tool.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DeploymentRecord(BaseModel):
    """One successful deployment of the function.

    ``deployment_package`` is only recorded by the update path.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    lambda_version: str = Field(alias="lambdaVersion")
    module_version: str = Field(default="", alias="moduleVersion")
    deployment_package: str | None = Field(default=None, alias="deploymentPackage")
    date: str = ""  # LastModified, as reported by the remote service
    user: str = ""


class AliasHistory(BaseModel):
    """Stage pointer: the version it targets now and every version it has targeted."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    current: str
    versions: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _current_is_tracked(self) -> AliasHistory:
        if self.current not in self.versions:
            raise ValueError(
                f"alias current version {self.current!r} is not in its versions list"
            )
        if len(set(self.versions)) != len(self.versions):
            raise ValueError("alias versions list contains duplicates")
        return self

    @classmethod
    def starting_at(cls, version: str) -> AliasHistory:
        return cls(current=version, versions=[version])

    def pointed_at(self, version: str) -> AliasHistory:
        """Return a copy targeting *version*; *version* is tracked at most once."""
        versions = list(self.versions)
        if version not in versions:
            versions.append(version)
        return AliasHistory(current=version, versions=versions)


class DeploymentHistory(BaseModel):
    """Append-only ledger of deployments and stage pointers for one spec."""

    model_config = ConfigDict(frozen=True, extra="allow")

    versions: list[DeploymentRecord] = Field(default_factory=list)
    aliases: dict[str, AliasHistory] = Field(default_factory=dict)

    def deployed_versions(self) -> list[str]:
        return [record.lambda_version for record in self.versions]

    def last_package(self) -> str | None:
        """Most recent archive name recorded by an update, if any."""
        for record in reversed(self.versions):
            if record.deployment_package:
                return record.deployment_package
        return None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
