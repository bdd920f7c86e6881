"""History Store — the per-spec deployment ledger.

The history file lives next to its spec and is named by replacing the
spec's extension with a fixed suffix: ``orders.json`` ->
``orders-history.json``.

Design:
- Append-only: ``append()`` adds a record at the end; records are never
  removed or reordered.
- Stage pointers: ``point_alias()`` keeps each alias's ``current`` inside
  its own ``versions`` list, with no duplicates.
- All operations return new ``DeploymentHistory`` objects; nothing is
  mutated in place.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from lambdaforge.core.errors import ParseError
from lambdaforge.core.jsonfile import read_document, write_document
from lambdaforge.models.history import AliasHistory, DeploymentHistory, DeploymentRecord

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SUFFIX = "-history.json"


def history_path_for(spec_path: Path, suffix: str = DEFAULT_HISTORY_SUFFIX) -> Path:
    """Derive the history file path for the spec at *spec_path*."""
    spec_path = Path(spec_path)
    return spec_path.with_name(f"{spec_path.stem}{suffix}")


def load_history(path: Path) -> DeploymentHistory:
    """Load the history at *path*.

    Raises ``NotFoundError`` if absent; callers decide whether that is
    expected.
    """
    document = read_document(path, kind="history")
    try:
        return DeploymentHistory.model_validate(document)
    except ValidationError as exc:
        raise ParseError(f"history {path} is malformed: {exc}", step="load-history") from exc


def save_history(path: Path, history: DeploymentHistory) -> None:
    write_document(path, history.to_document())
    logger.debug("Saved history (%d deployments) to %s", len(history.versions), path)


def new_history(record: DeploymentRecord) -> DeploymentHistory:
    """Start a history whose only entry is *record*, with no stage pointers."""
    return DeploymentHistory(versions=[record], aliases={})


def append(history: DeploymentHistory, record: DeploymentRecord) -> DeploymentHistory:
    """Return *history* with *record* appended after every existing record."""
    return history.model_copy(update={"versions": [*history.versions, record]})


def point_alias(
    history: DeploymentHistory,
    stage: str,
    version: str,
    *,
    created: bool,
) -> DeploymentHistory:
    """Return *history* with ``aliases[stage]`` pointing at *version*.

    A freshly created alias starts a new pointer history. An updated alias
    keeps its earlier versions and gains *version* only if it is not
    already tracked.
    """
    existing = history.aliases.get(stage)
    if created or existing is None:
        pointer = AliasHistory.starting_at(version)
    else:
        pointer = existing.pointed_at(version)
    return history.model_copy(update={"aliases": {**history.aliases, stage: pointer}})
