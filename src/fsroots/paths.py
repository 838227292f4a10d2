"""Path canonicalization for client-supplied filesystem paths.

Clients may run on a different OS than the server and spell paths the way
their own OS does. A WSL client sends `/mnt/c/Users/x`, a Git Bash client
sends `/c/Users/x`, a Windows client sends `c:/Users/x` or `C:\\Users\\x`.
`normalize_path` maps all of these to one comparable string without
touching the filesystem.

Drive-letter paths are normalized with Windows rules (`ntpath`) on every
host, so a POSIX server produces the same output a Windows server would.
"""

import ntpath
import os
import posixpath
import re
from enum import Enum
from pathlib import Path


class PathSyntax(Enum):
    """Surface syntax of a path string, in detection priority order."""

    WSL_MOUNT = "wsl_mount"
    UNIX_DRIVE = "unix_drive"
    WINDOWS_DRIVE = "windows_drive"
    POSIX = "posix"
    RELATIVE = "relative"


# First match wins. WSL mounts also match the single-letter pattern, so they
# must come first.
_SYNTAX_PATTERNS: list[tuple[PathSyntax, re.Pattern[str]]] = [
    (PathSyntax.WSL_MOUNT, re.compile(r"^/mnt/([a-zA-Z])(/.*)$", re.DOTALL)),
    (PathSyntax.UNIX_DRIVE, re.compile(r"^/([a-zA-Z])(/.*)$", re.DOTALL)),
    (PathSyntax.WINDOWS_DRIVE, re.compile(r"^[a-zA-Z]:")),
    (PathSyntax.POSIX, re.compile(r"^/")),
]

_DRIVE_PATH = re.compile(r"^[a-zA-Z]:")
_QUOTES = ("'", '"')


def _match_syntax(p: str) -> tuple[PathSyntax, re.Match[str] | None]:
    for syntax, pattern in _SYNTAX_PATTERNS:
        match = pattern.match(p)
        if match:
            return syntax, match
    return PathSyntax.RELATIVE, None


def classify_path(p: str) -> PathSyntax:
    """Detect which spelling a (stripped) path uses."""
    syntax, _ = _match_syntax(p)
    return syntax


def strip_wrapping(p: str) -> str:
    """Trim whitespace and one matching pair of surrounding quotes."""
    p = p.strip()
    if len(p) >= 2 and p[0] in _QUOTES and p[-1] == p[0]:
        p = p[1:-1]
    return p


def convert_to_windows_path(p: str) -> str:
    """Convert WSL-mount, Unix-drive and drive-letter paths to Windows form.

    POSIX and relative paths are returned unchanged.

    Examples:
        /mnt/c/Users/x -> C:\\Users\\x
        /c/Users/x     -> C:\\Users\\x
        c:/Users/x     -> c:\\Users\\x  (drive case is fixed by normalize_path)
    """
    syntax, match = _match_syntax(p)

    if syntax in (PathSyntax.WSL_MOUNT, PathSyntax.UNIX_DRIVE):
        drive = match.group(1).upper()
        rest = match.group(2).replace("/", "\\")
        return f"{drive}:{rest}"

    if syntax is PathSyntax.WINDOWS_DRIVE:
        return p.replace("/", "\\")

    return p


def _normalize_posix(p: str) -> str:
    if len(p) > 1:
        p = p.rstrip("/")
    return p


def normalize_path(p: str) -> str:
    """Return the canonical form of a path string.

    Plain POSIX paths only get duplicate and trailing slashes removed.
    Everything that looks like a Windows drive (including WSL and Unix-drive
    spellings) ends up as `X:\\...` with `.`/`..` segments resolved and the
    drive letter uppercased. Relative paths are normalized with host rules.

    Never raises; unrecognized input is normalized best-effort.
    """
    p = strip_wrapping(p)
    # Collapse before classifying so "//c/x" is seen as a drive path.
    p = re.sub(r"/+", "/", p)

    if classify_path(p) is PathSyntax.POSIX:
        return _normalize_posix(p)

    p = convert_to_windows_path(p)
    p = re.sub(r"\\+", r"\\", p)

    if not _DRIVE_PATH.match(p):
        return os.path.normpath(p)

    normalized = ntpath.normpath(p).replace("/", "\\")
    return normalized[0].upper() + normalized[1:]


def expand_home(filepath: str) -> str:
    """Expand a leading `~` or `~/` to the current user's home directory."""
    if filepath == "~":
        return str(Path.home())
    if filepath.startswith("~/"):
        return os.path.join(Path.home(), filepath[2:])
    return filepath


def is_path_within(path: str, directory: str) -> bool:
    """Check whether `path` is `directory` itself or lies beneath it.

    Both arguments are canonicalized first and `..` segments are resolved,
    so `/srv/a/../b` is not inside `/srv/a`. Drive-letter paths compare
    case-insensitively, POSIX paths case-sensitively.
    """
    path = normalize_path(path)
    directory = normalize_path(directory)

    path_is_drive = bool(_DRIVE_PATH.match(path))
    if path_is_drive != bool(_DRIVE_PATH.match(directory)):
        return False

    if path_is_drive:
        path, directory, sep = path.lower(), directory.lower(), "\\"
    else:
        path = posixpath.normpath(path)
        directory = posixpath.normpath(directory)
        sep = "/"

    if path == directory:
        return True
    prefix = directory if directory.endswith(sep) else directory + sep
    return path.startswith(prefix)
