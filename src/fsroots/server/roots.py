"""Validation of client-supplied roots.

Turns root specifications (`file://` URIs or bare paths) into canonical
directory paths and keeps only the ones that exist and are directories.
One bad root never aborts the batch: failures become `RejectedRoot`
entries instead of exceptions.
"""

import logging
import os
import stat as stat_module
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Protocol

import aiofiles.os

from fsroots.paths import normalize_path

logger = logging.getLogger(__name__)

FILE_URI_PREFIX = "file://"

StatFunction = Callable[[str], Awaitable[os.stat_result]]


class RootLike(Protocol):
    uri: str


@dataclass(frozen=True)
class RejectedRoot:
    """A root that did not make it into the validated list."""

    uri: str
    path: str
    error: str | None = None
    """Stat failure message, or None if the path exists but is not a directory."""

    def describe(self) -> str:
        if self.error is None:
            return f"Skipping non-directory root: {self.path}"
        return f"Skipping invalid directory: {self.path} due to error: {self.error}"


@dataclass
class RootValidationResult:
    directories: list[str] = field(default_factory=list)
    rejected: list[RejectedRoot] = field(default_factory=list)


def parse_root_uri(uri: str) -> str:
    """Convert a root URI or bare path to a canonical absolute path."""
    raw_path = uri[len(FILE_URI_PREFIX) :] if uri.startswith(FILE_URI_PREFIX) else uri
    return normalize_path(os.path.abspath(raw_path))


async def validate_roots(
    roots: Iterable[RootLike], stat: StatFunction = aiofiles.os.stat
) -> RootValidationResult:
    """Split roots into valid directories and rejections.

    Roots are checked one at a time in input order, so the accepted list
    keeps the client's ordering. Duplicates are passed through as-is.

    Args:
        roots: Root specifications, each with a `uri` attribute.
        stat: Async stat primitive. Defaults to `aiofiles.os.stat`.

    Returns:
        RootValidationResult with accepted directories and rejections.
    """
    result = RootValidationResult()

    for root in roots:
        path = parse_root_uri(root.uri)
        try:
            stats = await stat(path)
        except (OSError, ValueError) as e:
            result.rejected.append(RejectedRoot(uri=root.uri, path=path, error=str(e)))
            continue

        if stat_module.S_ISDIR(stats.st_mode):
            result.directories.append(path)
        else:
            result.rejected.append(RejectedRoot(uri=root.uri, path=path))

    return result


async def get_valid_root_directories(
    roots: Iterable[RootLike], stat: StatFunction = aiofiles.os.stat
) -> list[str]:
    """Return the roots that are existing directories, logging the rest."""
    result = await validate_roots(roots, stat=stat)
    for rejected in result.rejected:
        logger.warning(rejected.describe())
    return result.directories
