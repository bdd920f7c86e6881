"""Deploying-user lookup from the local git configuration."""

from __future__ import annotations

from lambdaforge.backends.runner import CommandRunner
from lambdaforge.core.errors import ExternalCallError


class GitUserResolver:
    """Reads the operator's name from ``git config <key>``."""

    def __init__(
        self,
        runner: CommandRunner,
        *,
        executable: str = "git",
        key: str = "github.user",
    ) -> None:
        self.runner = runner
        self.executable = executable
        self.key = key

    def current_user(self) -> str:
        try:
            user = self.runner.run([self.executable, "config", self.key], step="resolve-user").strip()
        except ExternalCallError as exc:
            if exc.returncode == 1 and not exc.stderr.strip():
                # git exits 1 silently when the key is unset
                raise ExternalCallError(
                    f"git config {self.key} is not set",
                    step="resolve-user",
                    command=exc.command,
                    returncode=exc.returncode,
                ) from exc
            raise
        if not user:
            raise ExternalCallError(f"git config {self.key} is empty", step="resolve-user")
        return user
