"""Spec Store — loads and saves the function spec file."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from lambdaforge.core.errors import ParseError
from lambdaforge.core.jsonfile import read_document, write_document
from lambdaforge.models.spec import FunctionSpec

logger = logging.getLogger(__name__)


def load_spec(path: Path) -> FunctionSpec:
    """Load and validate the spec at *path*.

    Raises ``NotFoundError`` if the file does not exist and ``ParseError``
    if it is not a well-formed spec.
    """
    document = read_document(path, kind="spec")
    try:
        spec = FunctionSpec.model_validate(document)
    except ValidationError as exc:
        raise ParseError(f"spec {path} is malformed: {exc}", step="load-spec") from exc
    logger.debug("Loaded spec for '%s' from %s", spec.function_name, path)
    return spec


def save_spec(path: Path, spec: FunctionSpec) -> None:
    """Overwrite the spec at *path*, preserving fields this tool does not know."""
    write_document(path, spec.to_document())
    logger.debug("Saved spec for '%s' to %s", spec.function_name, path)
