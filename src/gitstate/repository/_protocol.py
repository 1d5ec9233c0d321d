# ruff: noqa: TC001, TC002, TC003  # Names needed at runtime for Protocol signatures
"""Repository protocol for type-safe dependency injection.

This module defines the runtime-checkable Protocol that git collaborators
satisfy. The service layer depends only on this interface, so the real
git-binary implementation and the in-memory fake are interchangeable.
"""

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Protocol, runtime_checkable

from anyio.abc import ByteReceiveStream

from gitstate.events import Listener, Subscription
from gitstate.repository._models import (
    CommandResult,
    FileStatus,
    PushOptions,
    Ref,
    Remote,
)


@runtime_checkable
class RepositoryProtocol(Protocol):
    """Protocol for asynchronous git command execution.

    Implementations run git commands against a single working directory and
    return structured results. Failures are raised as `GitError` carrying a
    `GitErrorCode` where the condition is recognized.
    """

    @property
    def path(self) -> Path:
        """Working directory the repository is bound to."""
        ...

    @property
    def version(self) -> str:
        """Version string of the underlying git executable."""
        ...

    def on_output(self, listener: Listener[str]) -> Subscription:
        """Subscribe to raw command output chunks.

        Args:
            listener: Callable invoked with each output chunk.

        Returns:
            Subscription that detaches the listener when closed.
        """
        ...

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_status(self) -> list[FileStatus]:
        """Return working-tree status entries in git's order."""
        ...

    async def get_head(self) -> Ref:
        """Return the current reference (name is None when detached)."""
        ...

    async def get_branch(self, name: str) -> Ref:
        """Return a local branch with upstream tracking metadata."""
        ...

    async def get_refs(self) -> list[Ref]:
        """Return all branches, remote-tracking refs and tags."""
        ...

    async def get_remotes(self) -> list[Remote]:
        """Return all configured remotes."""
        ...

    async def run(self, args: Sequence[str]) -> CommandResult:
        """Run an arbitrary git command."""
        ...

    async def get_log(self, *, prev_count: int = 32, format: str = "") -> str:  # noqa: A002
        """Return ``git log`` output for the most recent commits."""
        ...

    async def buffer(self, object_name: str) -> str:
        """Return the full content of ``<treeish>:<path>`` as text."""
        ...

    def show(self, object_name: str) -> AbstractAsyncContextManager[ByteReceiveStream]:
        """Open a byte stream over the content of ``<treeish>:<path>``."""
        ...

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def init(self) -> None:
        """Create an empty repository in the working directory."""
        ...

    async def add(self, paths: Sequence[str] | None = None) -> None:
        """Stage paths, or everything when paths is None."""
        ...

    async def stage(self, path: str, content: str) -> None:
        """Stage the given content for a path without touching the file."""
        ...

    async def branch(self, name: str, *, checkout: bool = False) -> None:
        """Create a branch, optionally checking it out."""
        ...

    async def checkout(
        self, treeish: str | None = None, paths: Sequence[str] | None = None
    ) -> None:
        """Check out a treeish, or restore paths from it."""
        ...

    async def clean(self, paths: Sequence[str]) -> None:
        """Remove untracked paths."""
        ...

    async def undo(self) -> None:
        """Undo the last commit, keeping its changes staged."""
        ...

    async def reset(self, treeish: str, *, hard: bool = False) -> None:
        """Reset the current branch to a treeish."""
        ...

    async def revert_files(
        self, treeish: str, paths: Sequence[str] | None = None
    ) -> None:
        """Reset index entries for paths to a treeish."""
        ...

    async def fetch(self) -> None:
        """Fetch from the default remote."""
        ...

    async def pull(self, *, rebase: bool = False) -> None:
        """Pull from the upstream of the current branch."""
        ...

    async def push(
        self,
        remote: str | None = None,
        name: str | None = None,
        options: PushOptions | None = None,
    ) -> None:
        """Push a branch to a remote."""
        ...

    async def sync(self) -> None:
        """Pull then push the current branch."""
        ...

    async def commit(
        self, message: str, *, all_: bool = False, amend: bool = False
    ) -> None:
        """Record a commit."""
        ...
