"""Function spec model — the hand-authored descriptor for one Lambda function.

The spec file is edited by operators as well as by this tool, so unknown
top-level fields are preserved on every load/save round-trip, and fields
that were absent on load stay absent on save.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys that update-function-configuration rejects. They are stripped from
# the outbound payload only, never from the spec on disk.
REJECTED_CONFIGURATION_KEYS: frozenset[str] = frozenset(
    {"FunctionName", "FunctionArn", "Publish"}
)


class VpcConfig(BaseModel):
    """Network placement for the function (subnets and security groups)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    subnet_ids: list[str] = Field(default_factory=list, alias="SubnetIds")
    security_group_ids: list[str] = Field(default_factory=list, alias="SecurityGroupIds")

    def to_shorthand(self) -> str:
        """Render as AWS CLI shorthand: ``SubnetIds=a,b,SecurityGroupIds=c``."""
        return (
            f"SubnetIds={','.join(self.subnet_ids)},"
            f"SecurityGroupIds={','.join(self.security_group_ids)}"
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class FunctionSpec(BaseModel):
    """Declarative descriptor for one deployable function.

    ``lambdaconfig`` is the payload sent verbatim to create-function; after
    the first successful create it also carries the ``FunctionArn``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    zipfile: str
    s3bucket: str
    s3keyprefix: str = ""
    version: str = ""
    files: list[str] = Field(default_factory=list)
    lambdaconfig: dict[str, Any]
    vpcconfig: VpcConfig | None = None

    @field_validator("lambdaconfig")
    @classmethod
    def _requires_function_name(cls, value: dict[str, Any]) -> dict[str, Any]:
        name = value.get("FunctionName")
        if not isinstance(name, str) or not name:
            raise ValueError("lambdaconfig.FunctionName must be a non-empty string")
        return value

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def function_name(self) -> str:
        return self.lambdaconfig["FunctionName"]

    @property
    def function_arn(self) -> str:
        """The function ARN, or ``""`` before the first successful create."""
        return self.lambdaconfig.get("FunctionArn") or ""

    @property
    def has_identity(self) -> bool:
        return bool(self.function_arn)

    @property
    def publish(self) -> bool:
        return bool(self.lambdaconfig.get("Publish"))

    def with_arn(self, arn: str) -> FunctionSpec:
        """Return a copy of this spec with ``lambdaconfig.FunctionArn`` stamped in."""
        return self.model_copy(
            update={"lambdaconfig": {**self.lambdaconfig, "FunctionArn": arn}}
        )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def storage_key(self, archive: str) -> str:
        return f"{self.s3keyprefix}{archive}"

    def configuration_view(self) -> dict[str, Any]:
        """Return the configuration payload accepted by update-function-configuration.

        A filtered copy of ``lambdaconfig``; the spec itself is untouched.
        """
        return {
            key: value
            for key, value in self.lambdaconfig.items()
            if key not in REJECTED_CONFIGURATION_KEYS
        }

    def to_document(self) -> dict[str, Any]:
        """Serialize back to the on-disk JSON shape, extras included."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
