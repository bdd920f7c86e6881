"""Remote version resolution for set-stage.

The version listing is consumed as a lazy sequence of pages, restartable
from any continuation marker. The most recent version is taken to be the
last entry of the last page.

Known limitation: this relies on the service returning versions in
ascending order across pages. If it does not, the result is merely the
last entry of whichever page came last.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from lambdaforge.backends.protocols import FunctionService
from lambdaforge.core.errors import NotFoundError
from lambdaforge.models.remote import VersionPage

logger = logging.getLogger(__name__)


def iter_version_pages(
    service: FunctionService,
    function: str,
    *,
    marker: str | None = None,
) -> Iterator[VersionPage]:
    """Yield every page of the function's version listing, starting at *marker*."""
    while True:
        page = service.list_versions(function, marker=marker)
        yield page
        if not page.next_marker:
            return
        logger.debug("Following version listing marker %s", page.next_marker)
        marker = page.next_marker


def latest_version(pages: Iterable[VersionPage]) -> str:
    """Fold a page sequence down to its most recent version.

    Empty pages do not reset the result; a listing with no versions at all
    raises ``NotFoundError``.
    """
    latest: str | None = None
    for page in pages:
        if page.versions:
            latest = page.versions[-1]
    if latest is None:
        raise NotFoundError("function has no published versions", step="list-versions")
    return latest
