"""File reading helpers used by filesystem tools."""

import aiofiles
import aiofiles.os

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]
TAIL_CHUNK_SIZE = 1024


def format_size(num_bytes: int) -> str:
    """Format a byte count as a human-readable size, e.g. `1.50 KB`."""
    if num_bytes <= 0:
        return "0 B"

    i = 0
    while i + 1 < len(SIZE_UNITS) and num_bytes >= 1024 ** (i + 1):
        i += 1
    if i == 0:
        return f"{num_bytes} B"
    return f"{num_bytes / 1024**i:.2f} {SIZE_UNITS[i]}"


async def head_file(path: str, num_lines: int) -> str:
    """Return the first `num_lines` lines of a text file."""
    if num_lines <= 0:
        return ""

    lines: list[str] = []
    async with aiofiles.open(path, encoding="utf-8") as f:
        async for line in f:
            lines.append(line.rstrip("\r\n"))
            if len(lines) >= num_lines:
                break

    return "\n".join(lines)


async def tail_file(path: str, num_lines: int) -> str:
    """Return the last `num_lines` lines of a text file.

    Reads backwards in fixed-size chunks so large files are never loaded
    whole. Windows line endings are normalized to `\\n`.
    """
    if num_lines <= 0:
        return ""

    stats = await aiofiles.os.stat(path)
    position = stats.st_size
    if position == 0:
        return ""

    buffer = b""
    async with aiofiles.open(path, "rb") as f:
        # One newline more than requested guarantees num_lines complete lines.
        while position > 0 and buffer.count(b"\n") <= num_lines:
            size = min(TAIL_CHUNK_SIZE, position)
            position -= size
            await f.seek(position)
            buffer = await f.read(size) + buffer

    lines = buffer.decode("utf-8", errors="replace").replace("\r\n", "\n").split("\n")
    if position > 0:
        # First line may be cut in the middle.
        lines = lines[1:]
    return "\n".join(lines[-num_lines:])


async def read_text_file(
    path: str, head: int | None = None, tail: int | None = None
) -> str:
    """Read a text file, optionally limited to its first or last lines.

    Raises:
        ValueError: If both `head` and `tail` are given.
    """
    if head is not None and tail is not None:
        raise ValueError("Cannot specify both head and tail parameters simultaneously")

    if head is not None:
        return await head_file(path, head)
    if tail is not None:
        return await tail_file(path, tail)

    async with aiofiles.open(path, encoding="utf-8") as f:
        return await f.read()
