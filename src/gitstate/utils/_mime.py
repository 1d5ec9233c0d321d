"""Content-type sniffing for file buffers and byte streams.

Only the leading bytes of a source are inspected. Binary detection uses
dulwich's NUL-byte heuristic; an extension-based guess is added when the
path maps to a known type.
"""

import mimetypes
from os import PathLike
from typing import Final

import anyio
from anyio.abc import ByteReceiveStream  # noqa: TC002
from dulwich.patch import is_binary

MIME_TEXT: Final = "text/plain"
MIME_BINARY: Final = "application/octet-stream"

# Number of leading bytes inspected by default
DEFAULT_SNIFF_BYTES: Final = 512


def detect_mimes(buffer: bytes, path: str | None = None) -> list[str]:
    """Classify a buffer as text or binary, most specific type first.

    Args:
        buffer: Leading bytes of the content.
        path: Optional file name used for an extension-based guess.

    Returns:
        List of mime types; always ends with ``text/plain`` or
        ``application/octet-stream``.

    Example:
        >>> detect_mimes(b"print('hi')\\n", "main.py")
        ['text/x-python', 'text/plain']
        >>> detect_mimes(b"\\x89PNG\\r\\n\\x1a\\n\\x00\\x00", None)
        ['application/octet-stream']
    """
    generic = MIME_BINARY if is_binary(buffer) else MIME_TEXT
    mimes = [generic]

    if path:
        guessed, _ = mimetypes.guess_type(path, strict=False)
        if guessed and guessed != generic:
            mimes.insert(0, guessed)

    return mimes


async def detect_mimes_from_file(
    path: str | PathLike[str],
    *,
    sniff_bytes: int = DEFAULT_SNIFF_BYTES,
) -> list[str]:
    """Sniff the leading bytes of an on-disk file.

    Args:
        path: File to inspect.
        sniff_bytes: Maximum number of bytes to read.

    Returns:
        Mime types as returned by `detect_mimes`.
    """
    async with await anyio.open_file(path, "rb") as f:
        buffer = await f.read(sniff_bytes)
    return detect_mimes(buffer, str(path))


async def detect_mimes_from_stream(
    stream: ByteReceiveStream,
    path: str | None = None,
    *,
    sniff_bytes: int = DEFAULT_SNIFF_BYTES,
) -> list[str]:
    """Sniff the leading bytes of a byte stream.

    Reads until ``sniff_bytes`` bytes have arrived or the stream ends. The
    stream is not closed; its owner is responsible for that.

    Args:
        stream: Source of bytes, e.g. a subprocess stdout.
        path: Optional file name used for an extension-based guess.
        sniff_bytes: Maximum number of bytes to inspect.

    Returns:
        Mime types as returned by `detect_mimes`.
    """
    chunks: list[bytes] = []
    received = 0
    while received < sniff_bytes:
        try:
            chunk = await stream.receive(sniff_bytes - received)
        except (anyio.EndOfStream, anyio.ClosedResourceError):
            break
        chunks.append(chunk)
        received += len(chunk)

    return detect_mimes(b"".join(chunks)[:sniff_bytes], path)
