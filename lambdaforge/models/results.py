"""Outcomes of the orchestrator flows, consumed by the CLI renderer."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from lambdaforge.models.history import DeploymentRecord


class CreateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    function_name: str
    function_arn: str
    version: str
    storage_key: str
    uploaded: bool
    stage: str | None = None
    history_path: Path


class UpdateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    function_name: str
    function_arn: str
    record: DeploymentRecord
    storage_key: str
    uploaded: bool
    history_path: Path


class StageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    function_arn: str
    stage: str
    version: str
    created: bool
    history_path: Path
