# ruff: noqa: TC003  # Path needed at runtime for signatures
"""Memoized repository root resolution.

This module provides RepositoryRootResolver, a resolve-once cell holding the
canonical path of a repository's working tree for the lifetime of the
process.
"""

from collections.abc import Awaitable, Callable
from enum import StrEnum
from pathlib import Path
from typing import final

import anyio


class RootState(StrEnum):
    """Lifecycle of the resolve-once cell."""

    NOT_STARTED = "not_started"
    IN_FLIGHT = "in_flight"
    RESOLVED = "resolved"


async def canonical_path(path: Path) -> Path:
    """Resolve symlinks and relative segments; the path must exist.

    Raises:
        FileNotFoundError: If the path does not exist.
    """
    resolved = await anyio.Path(path).resolve(strict=True)
    return Path(resolved)


@final
class _Attempt:
    __slots__ = ("done", "error")

    def __init__(self) -> None:
        self.done = anyio.Event()
        self.error: Exception | None = None


@final
class RepositoryRootResolver:
    """Resolve a repository path once and share the result.

    Callers arriving while a resolution is in flight wait for it instead of
    starting another. A successful result is kept forever; a failure is
    raised to every waiter of that attempt and the cell returns to
    NOT_STARTED so a later call retries.

    Example:
        >>> resolver = RepositoryRootResolver(Path("."))
        >>> root = await resolver.get_root()
        >>> resolver.state
        <RootState.RESOLVED: 'resolved'>
    """

    __slots__ = ("_attempt", "_path", "_resolve", "_value")

    def __init__(
        self,
        path: Path,
        *,
        resolve: Callable[[Path], Awaitable[Path]] = canonical_path,
    ) -> None:
        """Initialize the resolver.

        Args:
            path: The repository working path to canonicalize.
            resolve: Async function performing the canonicalization.
        """
        self._path = path
        self._resolve = resolve
        self._attempt: _Attempt | None = None
        self._value: Path | None = None

    @property
    def state(self) -> RootState:
        """Return the current state of the cell."""
        if self._value is not None:
            return RootState.RESOLVED
        if self._attempt is not None:
            return RootState.IN_FLIGHT
        return RootState.NOT_STARTED

    async def get_root(self) -> Path:
        """Return the canonical repository root, resolving it at most once.

        Raises:
            Exception: Whatever the resolve function raised for this attempt.
        """
        while True:
            if self._value is not None:
                return self._value

            attempt = self._attempt
            if attempt is None:
                return await self._start()

            await attempt.done.wait()
            if attempt.error is not None:
                raise attempt.error
            # The initiating task was cancelled before finishing; start over.

    async def _start(self) -> Path:
        attempt = self._attempt = _Attempt()
        try:
            value = await self._resolve(self._path)
        except Exception as e:
            attempt.error = e
            raise
        else:
            self._value = value
            return value
        finally:
            if self._value is None:
                self._attempt = None
            attempt.done.set()
