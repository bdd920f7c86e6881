"""Structured results returned by the remote function service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CodeLocation(BaseModel):
    """Where a deployment archive lives in the object store."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    key: str

    def to_shorthand(self) -> str:
        return f"S3Bucket={self.bucket},S3Key={self.key}"


class FunctionPublication(BaseModel):
    """Outcome of create-function or update-function-code."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    arn: str
    version: str
    last_modified: str = ""


class AliasPointer(BaseModel):
    """Outcome of create-alias or update-alias."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    function_version: str


class VersionPage(BaseModel):
    """One page of list-versions-by-function output."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    versions: list[str] = Field(default_factory=list)
    next_marker: str | None = None
