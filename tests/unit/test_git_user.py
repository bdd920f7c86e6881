"""Tests for deploying-user lookup from git config."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from lambdaforge.backends.git import GitUserResolver
from lambdaforge.core.errors import ExternalCallError


class StubRunner:
    def __init__(self, output: str = "", error: ExternalCallError | None = None) -> None:
        self.output = output
        self.error = error
        self.commands: list[list[str]] = []

    def run(self, command: Sequence[str], *, step: str) -> str:
        self.commands.append(list(command))
        if self.error is not None:
            raise self.error
        return self.output


class TestGitUserResolver:
    def test_reads_configured_key(self):
        runner = StubRunner("octocat\n")
        assert GitUserResolver(runner).current_user() == "octocat"
        assert runner.commands == [["git", "config", "github.user"]]

    def test_custom_key(self):
        runner = StubRunner("Jane Doe\n")
        GitUserResolver(runner, key="user.name").current_user()
        assert runner.commands[0][-1] == "user.name"

    def test_unset_key_message(self):
        error = ExternalCallError("exit status 1", step="resolve-user", returncode=1, stderr="")
        with pytest.raises(ExternalCallError) as excinfo:
            GitUserResolver(StubRunner(error=error)).current_user()
        assert excinfo.value.message == "git config github.user is not set"

    def test_other_failures_propagate(self):
        error = ExternalCallError("fatal: not in a git directory", step="resolve-user", returncode=128, stderr="fatal")
        with pytest.raises(ExternalCallError) as excinfo:
            GitUserResolver(StubRunner(error=error)).current_user()
        assert excinfo.value is error

    def test_empty_value(self):
        with pytest.raises(ExternalCallError):
            GitUserResolver(StubRunner("  \n")).current_user()
