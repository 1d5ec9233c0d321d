# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake repository for testing.

This module provides a FakeRepository class that implements
RepositoryProtocol in memory, for use in tests without a git executable.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import override

import anyio
from anyio.abc import ByteReceiveStream

from gitstate.enums import RefType
from gitstate.events import Emitter, Listener, Subscription
from gitstate.exceptions import GitError
from gitstate.repository._models import (
    CommandResult,
    FileStatus,
    PushOptions,
    Ref,
    Remote,
)


class _BytesReceiveStream(ByteReceiveStream):
    """Byte stream over an in-memory buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0
        self.closed = False

    @override
    async def receive(self, max_bytes: int = 65536) -> bytes:
        if self.closed:
            raise anyio.ClosedResourceError
        if self._offset >= len(self._data):
            raise anyio.EndOfStream
        chunk = self._data[self._offset : self._offset + max_bytes]
        self._offset += len(chunk)
        return chunk

    @override
    async def aclose(self) -> None:
        self.closed = True


@dataclass(slots=True)
class FakeRepository:
    """Fake git repository for testing.

    Implements RepositoryProtocol without running git. State is plain data
    that tests set up directly; mutations update it in a simplified way so
    a refreshed status reflects them.

    Failures are injected per method name through ``failures``: the mapped
    exception is raised every time that method is called.

    Example:
        >>> repo = FakeRepository()
        >>> repo.status_entries.append(FileStatus("?", "?", "new.txt"))
        >>> await repo.add(None)
        >>> repo.status_entries[0].x
        'A'
    """

    path: Path = field(default_factory=lambda: Path("/fake/repo"))
    version: str = "2.45.0"
    status_entries: list[FileStatus] = field(default_factory=list)
    head: Ref = field(default_factory=lambda: Ref(name="main", type=RefType.HEAD))
    branches: dict[str, Ref] = field(default_factory=dict)
    refs: list[Ref] = field(default_factory=list)
    remotes: list[Remote] = field(default_factory=list)
    config: dict[str, str] = field(default_factory=dict)
    messages: list[str] = field(default_factory=list)
    objects: dict[str, bytes] = field(default_factory=dict)
    failures: dict[str, BaseException] = field(default_factory=dict)
    calls: list[tuple[str, tuple[object, ...]]] = field(default_factory=list)
    opened_streams: list[str] = field(default_factory=list)
    _output: Emitter[str] = field(default_factory=Emitter)

    # =========================================================================
    # Test Helpers
    # =========================================================================

    def emit(self, chunk: str) -> None:
        """Publish a raw output chunk to subscribers."""
        self._output.fire(chunk)

    @property
    def output_listener_count(self) -> int:
        """Return the number of attached output listeners."""
        return self._output.listener_count

    def call_names(self) -> list[str]:
        """Return the names of recorded calls in order."""
        return [name for name, _ in self.calls]

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, args))
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    # =========================================================================
    # RepositoryProtocol Reads
    # =========================================================================

    def on_output(self, listener: Listener[str]) -> Subscription:
        """Subscribe to raw output chunks."""
        return self._output.subscribe(listener)

    async def get_status(self) -> list[FileStatus]:
        """Return a copy of the configured status entries."""
        self._record("get_status")
        return list(self.status_entries)

    async def get_head(self) -> Ref:
        """Return the configured HEAD."""
        self._record("get_head")
        return self.head

    async def get_branch(self, name: str) -> Ref:
        """Return branch metadata, failing like git for unknown branches."""
        self._record("get_branch", name)
        try:
            return self.branches[name]
        except KeyError:
            msg = f"Failed to execute git rev-parse {name}"
            raise GitError(
                msg,
                command=("rev-parse", name),
                exit_code=128,
                stderr=f"fatal: ambiguous argument '{name}': unknown revision",
            ) from None

    async def get_refs(self) -> list[Ref]:
        """Return a copy of the configured refs."""
        self._record("get_refs")
        return list(self.refs)

    async def get_remotes(self) -> list[Remote]:
        """Return a copy of the configured remotes."""
        self._record("get_remotes")
        return list(self.remotes)

    async def run(self, args: Sequence[str]) -> CommandResult:
        """Answer ``config --get <key>`` from ``config``; anything else fails."""
        self._record("run", tuple(args))
        if len(args) == 3 and args[0] == "config" and args[1] == "--get":  # noqa: PLR2004
            value = self.config.get(args[2])
            if value is not None:
                return CommandResult(exit_code=0, stdout=f"{value}\n", stderr="")
        msg = f"Failed to execute git {args[0] if args else ''}"
        raise GitError(msg, command=args, exit_code=1)

    async def get_log(self, *, prev_count: int = 32, format: str = "") -> str:  # noqa: A002
        """Return the newest ``prev_count`` commit messages."""
        self._record("get_log", prev_count, format)
        if not self.messages:
            msg = "Failed to execute git log"
            raise GitError(
                msg,
                command=("log",),
                exit_code=128,
                stderr="fatal: your current branch does not have any commits yet",
            )
        return "".join(f"{m}\n" for m in self.messages[:prev_count])

    async def buffer(self, object_name: str) -> str:
        """Return object content, failing like git for unknown objects."""
        self._record("buffer", object_name)
        try:
            return self.objects[object_name].decode()
        except KeyError:
            msg = "Failed to execute git show"
            raise GitError(
                msg,
                command=("show", object_name),
                exit_code=128,
                stderr=f"fatal: path '{object_name}' does not exist",
            ) from None

    @asynccontextmanager
    async def show(self, object_name: str) -> AsyncIterator[ByteReceiveStream]:
        """Yield a byte stream over object content (empty when unknown)."""
        self._record("show", object_name)
        self.opened_streams.append(object_name)
        stream = _BytesReceiveStream(self.objects.get(object_name, b""))
        try:
            yield stream
        finally:
            await stream.aclose()

    # =========================================================================
    # RepositoryProtocol Mutations
    # =========================================================================

    async def init(self) -> None:
        """Record an init."""
        self._record("init")

    async def add(self, paths: Sequence[str] | None = None) -> None:
        """Mark matching entries as staged."""
        self._record("add", None if paths is None else tuple(paths))
        selected = None if paths is None else set(paths)
        self.status_entries = [
            FileStatus(
                x="A" if entry.is_untracked else entry.y, y=" ", path=entry.path
            )
            if (selected is None or entry.path in selected) and entry.y != " "
            else entry
            for entry in self.status_entries
        ]

    async def stage(self, path: str, content: str) -> None:
        """Record staged content as the index version of ``path``."""
        self._record("stage", path, content)
        self.objects[f":{path}"] = content.encode()

    async def branch(self, name: str, *, checkout: bool = False) -> None:
        """Create a branch ref, optionally moving HEAD to it."""
        self._record("branch", name, checkout)
        new_ref = Ref(name=name, commit=self.head.commit, type=RefType.HEAD)
        self.refs.append(new_ref)
        if checkout:
            self.head = Ref(name=name, type=RefType.HEAD)

    async def checkout(
        self, treeish: str | None = None, paths: Sequence[str] | None = None
    ) -> None:
        """Move HEAD to a branch when no paths are given."""
        self._record("checkout", treeish, None if paths is None else tuple(paths))
        if treeish and not paths:
            self.head = Ref(name=treeish, type=RefType.HEAD)

    async def clean(self, paths: Sequence[str]) -> None:
        """Drop untracked entries for ``paths``."""
        self._record("clean", tuple(paths))
        targets = set(paths)
        self.status_entries = [
            e for e in self.status_entries if not (e.is_untracked and e.path in targets)
        ]

    async def undo(self) -> None:
        """Drop the newest commit message."""
        self._record("undo")
        if self.messages:
            self.messages.pop(0)

    async def reset(self, treeish: str, *, hard: bool = False) -> None:
        """Record a reset; a hard reset clears tracked changes."""
        self._record("reset", treeish, hard)
        if hard:
            self.status_entries = [e for e in self.status_entries if e.is_untracked]

    async def revert_files(
        self, treeish: str, paths: Sequence[str] | None = None
    ) -> None:
        """Record a revert."""
        self._record("revert_files", treeish, None if paths is None else tuple(paths))

    async def fetch(self) -> None:
        """Record a fetch."""
        self._record("fetch")

    async def pull(self, *, rebase: bool = False) -> None:
        """Record a pull."""
        self._record("pull", rebase)

    async def push(
        self,
        remote: str | None = None,
        name: str | None = None,
        options: PushOptions | None = None,
    ) -> None:
        """Record a push."""
        self._record("push", remote, name, options)

    async def sync(self) -> None:
        """Record a sync."""
        self._record("sync")

    async def commit(
        self, message: str, *, all_: bool = False, amend: bool = False
    ) -> None:
        """Clear staged entries and record the message as the newest commit."""
        self._record("commit", message, all_, amend)
        if amend and self.messages:
            self.messages[0] = message
        else:
            self.messages.insert(0, message)
        self.status_entries = [
            e for e in self.status_entries if e.is_untracked or e.x == " "
        ]
