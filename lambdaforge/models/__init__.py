"""Lambdaforge data models — all Pydantic v2, all frozen (immutable)."""

from lambdaforge.models.history import AliasHistory, DeploymentHistory, DeploymentRecord
from lambdaforge.models.options import DeployOptions
from lambdaforge.models.remote import (
    AliasPointer,
    CodeLocation,
    FunctionPublication,
    VersionPage,
)
from lambdaforge.models.results import CreateResult, StageResult, UpdateResult
from lambdaforge.models.spec import REJECTED_CONFIGURATION_KEYS, FunctionSpec, VpcConfig

__all__ = [
    # spec
    "FunctionSpec",
    "VpcConfig",
    "REJECTED_CONFIGURATION_KEYS",
    # history
    "DeploymentRecord",
    "AliasHistory",
    "DeploymentHistory",
    # options
    "DeployOptions",
    # remote
    "CodeLocation",
    "FunctionPublication",
    "AliasPointer",
    "VersionPage",
    # results
    "CreateResult",
    "UpdateResult",
    "StageResult",
]
