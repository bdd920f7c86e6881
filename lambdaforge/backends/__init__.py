"""External collaborator backends: Protocols and command-line implementations."""

from lambdaforge.backends.aws_cli import AwsCli, AwsCliFunctionService, AwsCliObjectStore
from lambdaforge.backends.git import GitUserResolver
from lambdaforge.backends.npm import NpmPackageBuilder
from lambdaforge.backends.protocols import (
    FunctionService,
    ObjectStore,
    PackageBuilder,
    UserResolver,
)
from lambdaforge.backends.runner import CommandRunner

__all__ = [
    "PackageBuilder",
    "ObjectStore",
    "FunctionService",
    "UserResolver",
    "CommandRunner",
    "AwsCli",
    "AwsCliObjectStore",
    "AwsCliFunctionService",
    "NpmPackageBuilder",
    "GitUserResolver",
]
