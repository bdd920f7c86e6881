"""JSON document I/O shared by the spec and history stores."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from lambdaforge.core.errors import NotFoundError, ParseError


def read_document(path: Path, *, kind: str) -> dict[str, Any]:
    """Read a JSON object from *path*.

    Raises ``NotFoundError`` if the file is missing or unreadable and
    ``ParseError`` if it is not a UTF-8 JSON object. *kind* names the
    document in error messages.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(f"{kind} not found: {path}", step=f"load-{kind}") from exc
    except IsADirectoryError as exc:
        raise NotFoundError(f"{kind} path is a directory: {path}", step=f"load-{kind}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"{kind} {path} is not valid UTF-8: {exc}", step=f"load-{kind}") from exc
    except OSError as exc:
        raise NotFoundError(f"cannot read {kind} {path}: {exc}", step=f"load-{kind}") from exc

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"{kind} {path} is not valid JSON: {exc}", step=f"load-{kind}"
        ) from exc

    if not isinstance(document, dict):
        raise ParseError(
            f"{kind} {path} must contain a JSON object, got {type(document).__name__}",
            step=f"load-{kind}",
        )
    return document


def _target_mode(path: Path) -> int:
    """Permission bits for *path*: its current mode, or the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_document(path: Path, document: dict[str, Any]) -> None:
    """Write *document* to *path* as indented JSON.

    Symlinks are followed, so the link target is rewritten and the link
    stays in place. The content goes to a sibling temp file first and is
    then moved into place with the target's permission bits, so a crash
    never leaves a truncated file behind. There is no protection against
    concurrent writers.
    """
    path = Path(path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(document, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
