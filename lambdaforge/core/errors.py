"""Error taxonomy for deployment flows.

Every error is terminal for the current invocation. Each carries the
``step`` that failed so the CLI can tell the operator where the flow
stopped; nothing is retried and no step is resumed.
"""

from __future__ import annotations

from collections.abc import Sequence


class DeployError(RuntimeError):
    """Base class for all lambdaforge errors.

    Parameters
    ----------
    message:
        Human-readable description, shown to the operator as-is.
    step:
        Short label of the flow step that failed, e.g. ``"create-function"``.
    """

    def __init__(self, message: str, *, step: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.step = step


class UsageError(DeployError):
    """A required command-line argument is missing or malformed."""


class NotFoundError(DeployError):
    """A spec or history file does not exist."""


class ParseError(DeployError):
    """A spec or history file exists but is not a well-formed descriptor."""


class AlreadyExistsError(DeployError):
    """Create was requested for a spec that already carries a function ARN."""


class MissingIdentityError(DeployError):
    """The spec has no function ARN, so the function was never created."""


class MissingHistoryError(DeployError):
    """The deployment history file is absent where one is required."""


class ExternalCallError(DeployError):
    """An external tool (packaging, upload, remote service) failed.

    Wraps the underlying tool's exit status and stderr output.
    """

    def __init__(
        self,
        message: str,
        *,
        step: str = "",
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, step=step)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class PartialFailureError(DeployError):
    """A multi-step flow stopped after changing some, but not all, state.

    Local and remote state are now inconsistent and need manual
    reconciliation. ``completed`` lists the steps that did succeed.
    """

    def __init__(
        self,
        message: str,
        *,
        step: str = "",
        completed: Sequence[str] = (),
    ) -> None:
        super().__init__(message, step=step)
        self.completed = list(completed)
