"""Runtime configuration — env-driven, read once by the CLI.

Centralized settings using pydantic-settings. Reads from a .env file and
LAMBDAFORGE_* environment variables. Command-line flags always take
precedence; the deployment core never reads these settings directly.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class LambdaforgeSettings(BaseSettings):
    """Tool configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export LAMBDAFORGE_LOG_LEVEL=DEBUG
        export LAMBDAFORGE_DEFAULT_REGION=eu-central-1
        export LAMBDAFORGE_GIT_USER_KEY=user.name

    Or via .env file::

        LAMBDAFORGE_DEFAULT_PROFILE=deploy
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LAMBDAFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    # External executables
    aws_cli: str = "aws"
    npm_cli: str = "npm"
    zip_cli: str = "zip"
    git_cli: str = "git"

    # git config key holding the deploying user's name
    git_user_key: str = "github.user"

    # <spec stem><history_suffix>, next to the spec file
    history_suffix: str = "-history.json"

    # Fallbacks when --profile / --region are not given
    default_profile: str | None = None
    default_region: str | None = None

    # None means external commands run without a time limit
    command_timeout_seconds: float | None = None

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level.upper()


# Module-level singleton — import as `from lambdaforge.config import config`
config = LambdaforgeSettings()
