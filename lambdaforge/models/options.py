"""Per-invocation deployment options, passed explicitly into every flow."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DeployOptions(BaseModel):
    """Options for one create/update/set-stage invocation.

    ``profile`` and ``region`` select the AWS credentials and region used by
    the CLI-backed collaborators; ``None`` defers to the AWS CLI defaults.
    """

    model_config = ConfigDict(frozen=True)

    skip_upload: bool = False
    stage: str | None = None
    profile: str | None = None
    region: str | None = None
