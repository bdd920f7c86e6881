"""Subprocess runner for the external command-line tools.

Every invocation is synchronous. A non-zero exit, a missing executable or
a timeout becomes an ``ExternalCallError`` carrying the tool's own message.
"""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from lambdaforge.core.errors import ExternalCallError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands and captures their output.

    Parameters
    ----------
    timeout:
        Seconds before a command is killed. ``None`` waits indefinitely.
    cwd:
        Working directory for every command. Defaults to the process's own.
    """

    def __init__(self, *, timeout: float | None = None, cwd: Path | None = None) -> None:
        self.timeout = timeout
        self.cwd = cwd

    def run(self, command: Sequence[str], *, step: str) -> str:
        """Run *command* and return its stdout."""
        argv = [str(part) for part in command]
        logger.debug("Running %s: %s", step, shlex.join(argv))
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=self.cwd,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ExternalCallError(
                f"'{argv[0]}' not found on PATH", step=step, command=argv
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExternalCallError(
                f"'{argv[0]}' timed out after {self.timeout}s", step=step, command=argv
            ) from exc

        if completed.returncode != 0:
            detail = (
                completed.stderr.strip()
                or completed.stdout.strip()
                or f"exit status {completed.returncode}"
            )
            raise ExternalCallError(
                detail,
                step=step,
                command=argv,
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        return completed.stdout

    def run_json(self, command: Sequence[str], *, step: str) -> dict[str, Any]:
        """Run *command* and parse its stdout as a JSON object."""
        output = self.run(command, step=step)
        try:
            document = json.loads(output) if output.strip() else {}
        except json.JSONDecodeError as exc:
            raise ExternalCallError(
                f"unreadable output from {step}: {exc}", step=step, command=list(command)
            ) from exc
        if not isinstance(document, dict):
            raise ExternalCallError(
                f"unexpected output from {step}: {output[:200]}", step=step, command=list(command)
            )
        return document
