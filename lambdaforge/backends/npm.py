"""npm + zip package builder for Node.js functions."""

from __future__ import annotations

import logging
from pathlib import Path

from lambdaforge.backends.runner import CommandRunner
from lambdaforge.core.errors import ExternalCallError
from lambdaforge.models.spec import FunctionSpec

logger = logging.getLogger(__name__)


class NpmPackageBuilder:
    """Builds ``<archive>`` in the working directory.

    Refreshes dependencies, compiles, prunes dev dependencies and zips the
    spec's ``files`` together with ``package.json`` and ``node_modules``.
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        npm: str = "npm",
        zip_executable: str = "zip",
        workdir: Path | None = None,
    ) -> None:
        self.runner = runner
        self.npm = npm
        self.zip_executable = zip_executable
        self.workdir = Path(workdir) if workdir is not None else None

    def build(self, spec: FunctionSpec, archive: str) -> Path:
        workdir = self.workdir or Path.cwd()
        self.remove_stale_archives(spec.zipfile, workdir)

        logger.info("Updating package dependencies...")
        self.runner.run([self.npm, "update", "-S"], step="npm-update")
        self.runner.run([self.npm, "update", "-D"], step="npm-update")

        logger.info("Compiling package...")
        self.runner.run([self.npm, "run", "compile"], step="npm-compile")

        logger.info("Removing dev dependencies...")
        self.runner.run([self.npm, "prune", "--production"], step="npm-prune")

        logger.info("Creating distribution package '%s' from [%s]...", archive, ",".join(spec.files))
        target = workdir / archive
        self.runner.run(
            [
                self.zip_executable, "-rq",
                str(target.with_suffix("")),
                *expand_globs(spec.files, workdir),
                "package.json", "node_modules",
            ],
            step="zip",
        )
        if not target.is_file():
            raise ExternalCallError(f"zip did not produce {target}", step="zip")
        return target

    @staticmethod
    def remove_stale_archives(zipfile: str, workdir: Path) -> list[Path]:
        """Delete archives left over from earlier builds of *zipfile*."""
        removed: list[Path] = []
        for stale in sorted(workdir.glob(f"{zipfile}_*.zip")):
            try:
                stale.unlink()
            except OSError as exc:
                raise ExternalCallError(
                    f"could not remove old archive {stale}: {exc}", step="remove-stale-archives"
                ) from exc
            removed.append(stale)
        if removed:
            logger.debug("Removed %d stale archive(s)", len(removed))
        return removed


def expand_globs(patterns: list[str], workdir: Path) -> list[str]:
    """Expand *patterns* relative to *workdir*; unmatched patterns pass through."""
    expanded: list[str] = []
    for pattern in patterns:
        if Path(pattern).is_absolute():
            expanded.append(pattern)
            continue
        matches = sorted(str(path.relative_to(workdir)) for path in workdir.glob(pattern))
        expanded.extend(matches or [pattern])
    return expanded
