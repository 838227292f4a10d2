"""
Filesystem scope discovery for filesystem servers.

Roots tell a server which directories a client is willing to expose. The
server asks for them once the session is up and again whenever the client
says they changed.

## Discovery Flow

1. **Server asks** - `roots/list` request
2. **Client responds** - list of `Root` entries, each a `file://` URI or a
   bare path
3. **Server validates** - keeps the entries that are existing directories
4. **Dynamic updates** - `notifications/roots/list_changed` triggers a new
   request

A root URI is only a claim. Nothing here touches the filesystem; see
`fsroots.server.roots` for validation.
"""

from typing import Any, Literal

from pydantic import Field

from fsroots.protocol.base import Notification, ProtocolModel, Request, Result


class Root(ProtocolModel):
    """
    A directory the client allows the server to operate in.
    """

    uri: str
    """
    Either a `file://` URI or a plain path in POSIX, Windows drive-letter or
    WSL-mount spelling.
    """

    name: str | None = None
    """
    Optional human-readable identifier for this root.
    """

    metadata: dict[str, Any] | None = Field(default=None, alias="_meta")


class ListRootsRequest(Request):
    """
    Server request to discover which directories it can access.
    """

    method: Literal["roots/list"] = "roots/list"


class ListRootsResult(Result):
    """
    Client response with its current roots, in the client's order.
    """

    roots: list[Root]


class RootsListChangedNotification(Notification):
    """
    Client notification that its roots changed.
    """

    method: Literal["notifications/roots/list_changed"] = (
        "notifications/roots/list_changed"
    )
