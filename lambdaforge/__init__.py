"""Lambdaforge: single-function AWS Lambda deployment with a local history.

Packages a function's code, uploads it to S3, creates or updates the
Lambda function and its stage aliases, and keeps the spec file, a
deployment history file and the remote function consistent with each
other across invocations.
"""

__version__ = "0.2.0"
__description__ = "Create, update and stage an AWS Lambda function from a JSON spec"

from lambdaforge.core.orchestrator import DeploymentOrchestrator

__all__ = ["DeploymentOrchestrator", "__version__"]
