"""Client-aware roots manager for filesystem servers."""

import logging
import os
from typing import Awaitable, Callable

import aiofiles.os

from fsroots.paths import (
    PathSyntax,
    classify_path,
    expand_home,
    is_path_within,
    normalize_path,
    strip_wrapping,
)
from fsroots.protocol.roots import ListRootsResult, RootsListChangedNotification
from fsroots.server.roots import StatFunction, get_valid_root_directories

RootsRequester = Callable[[str], Awaitable[ListRootsResult]]
DirectoriesChangedCallback = Callable[[str, list[str]], Awaitable[None]]


class RootsNotConfiguredError(Exception):
    """Raised when roots are refreshed but no requester is configured."""

    pass


class RootsManager:
    """Tracks the directories each client allows the server to access.

    Until a client supplies at least one valid root, it gets the fallback
    directories from the server configuration.
    """

    def __init__(
        self,
        fallback_directories: list[str] | None = None,
        stat: StatFunction = aiofiles.os.stat,
    ):
        self.fallback_directories: list[str] = list(fallback_directories or [])
        self.client_directories: dict[str, list[str]] = {}
        self._stat = stat
        self._request_roots: RootsRequester | None = None
        self._on_directories_change: DirectoriesChangedCallback | None = None
        self.logger = logging.getLogger("fsroots.server.managers.roots")

    def set_roots_requester(self, requester: RootsRequester) -> None:
        """Set the callable that sends `roots/list` to a client."""
        self._request_roots = requester

    def on_directories_change(self, callback: DirectoriesChangedCallback) -> None:
        """Set callback for accepted directory updates with client context."""
        self._on_directories_change = callback

    def get_allowed_directories(self, client_id: str) -> list[str]:
        """Get the directories a client may access, falling back to config."""
        if client_id in self.client_directories:
            return list(self.client_directories[client_id])
        return list(self.fallback_directories)

    async def handle_list_roots_result(
        self, client_id: str, result: ListRootsResult
    ) -> list[str]:
        """Validate a client's roots and store the ones that are directories.

        A batch with no valid roots leaves the current directories untouched,
        so a misconfigured client never loses access it already had.

        Args:
            client_id: ID of the client that sent the roots.
            result: The client's `roots/list` response.

        Returns:
            The directories now in effect for this client.
        """
        directories = await get_valid_root_directories(result.roots, stat=self._stat)

        if not directories:
            self.logger.error(
                f"No valid root directories provided by client {client_id}, "
                "keeping current directories"
            )
            return self.get_allowed_directories(client_id)

        self.client_directories[client_id] = directories
        self.logger.info(
            f"Updated allowed directories for client {client_id}: {directories}"
        )

        if self._on_directories_change:
            try:
                await self._on_directories_change(client_id, list(directories))
            except Exception as e:
                self.logger.error(
                    f"Error in directories change callback for {client_id}: {e}"
                )

        return list(directories)

    async def refresh(self, client_id: str) -> list[str]:
        """Ask the client for its roots and apply them.

        Raises:
            RootsNotConfiguredError: If no roots requester is set.
            Exception: Any exception from the requester.
        """
        if self._request_roots is None:
            raise RootsNotConfiguredError("No roots requester registered")
        result = await self._request_roots(client_id)
        return await self.handle_list_roots_result(client_id, result)

    async def handle_list_changed(
        self, client_id: str, notification: RootsListChangedNotification
    ) -> None:
        """Re-fetch roots after the client reports a change."""
        await self.refresh(client_id)

    def is_path_allowed(self, client_id: str, path: str) -> bool:
        """Check if a path lies inside one of the client's allowed directories."""
        expanded = expand_home(strip_wrapping(path))
        if classify_path(expanded) in (PathSyntax.POSIX, PathSyntax.RELATIVE):
            expanded = os.path.abspath(expanded)
        candidate = normalize_path(expanded)
        return any(
            is_path_within(candidate, directory)
            for directory in self.get_allowed_directories(client_id)
        )

    def cleanup_client(self, client_id: str) -> None:
        """Forget a disconnected client's directories."""
        self.client_directories.pop(client_id, None)
