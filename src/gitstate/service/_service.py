# ruff: noqa: TC001, TC003  # Names needed at runtime for signatures
"""Stateful git service.

This module provides GitService, the façade that turns high-level intents
(stage, commit, branch, push, ...) into collaborator calls and answers each
of them with a freshly aggregated RepositorySnapshot.

Every mutating operation shares one post-condition: once the collaborator
call succeeds, status is recomputed and returned. Failures are classified
by `classify` at the call that produced them.
"""

from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final

import anyio

from gitstate.enums import ServiceState
from gitstate.events import Listener, Subscription
from gitstate.exceptions import RepositoryUnavailableError
from gitstate.repository._models import PushOptions, Ref
from gitstate.repository._protocol import RepositoryProtocol
from gitstate.service._classify import ErrorContext, Fatal, Suppressed, classify
from gitstate.service._commit_info import read_commit_template
from gitstate.service._models import CommitInfo, RepositorySnapshot
from gitstate.service._relay import OutputRelay
from gitstate.service._root import RepositoryRootResolver, canonical_path
from gitstate.utils._concurrency import gather
from gitstate.utils._mime import (
    DEFAULT_SNIFF_BYTES,
    detect_mimes_from_file,
    detect_mimes_from_stream,
)

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Treeish values that address the working tree rather than a revision
_WORKING_TREE_TREEISH: Final = frozenset({"", "~"})


def normalize_treeish(treeish: str | None) -> str:
    """Return the object-name prefix for a treeish.

    Empty, ``~`` and None all address the working tree, which git spells as
    an empty prefix (``:<path>``).
    """
    if treeish is None or treeish in _WORKING_TREE_TREEISH:
        return ""
    return treeish


def _is_fatal_status_error(error: BaseException) -> bool:
    return isinstance(error, Exception) and isinstance(
        classify(error, context=ErrorContext.STATUS), Fatal
    )


class GitService:
    """Façade over a git repository collaborator.

    A service is bound to at most one repository for its whole lifetime.
    Without a repository (git could not be located) the service reports
    `ServiceState.VCS_NOT_FOUND`, counts zero changes and raises
    `RepositoryUnavailableError` for every other operation.

    Attributes:
        repository: The bound collaborator, or None.

    Example:
        >>> service = GitService(await GitRepository.open(Path.cwd()))
        >>> snapshot = await service.add(["README.md"])
        >>> snapshot.status[0].x
        'A'
    """

    __slots__ = ("_logger", "_relay", "_root", "_sniff_bytes", "repository")

    def __init__(
        self,
        repository: RepositoryProtocol | None,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
        sniff_bytes: int = DEFAULT_SNIFF_BYTES,
        resolve_root: Callable[[Path], Awaitable[Path]] = canonical_path,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Collaborator to drive, or None when git is missing.
            logger: Optional logger for classification outcomes and
                commit-info lookups. If None, no logging is performed.
            sniff_bytes: Number of leading bytes inspected by
                detect_mimetypes().
            resolve_root: Canonicalization used for the repository root.
        """
        self.repository = repository
        self._logger = logger
        self._sniff_bytes = sniff_bytes
        self._root: RepositoryRootResolver | None = None
        self._relay: OutputRelay | None = None
        if repository is not None:
            self._root = RepositoryRootResolver(
                repository.path, resolve=resolve_root
            )
            self._relay = OutputRelay(repository.on_output)

    def _require(self) -> RepositoryProtocol:
        if self.repository is None:
            msg = "No git repository is available"
            raise RepositoryUnavailableError(msg)
        return self.repository

    # =========================================================================
    # Service Information
    # =========================================================================

    async def get_version(self) -> str:
        """Return the git version, or an empty string without a repository."""
        if self.repository is None:
            return ""
        return self.repository.version

    async def service_state(self) -> ServiceState:
        """Return whether a repository collaborator is bound."""
        if self.repository is None:
            return ServiceState.VCS_NOT_FOUND
        return ServiceState.OK

    async def status_count(self) -> int:
        """Return the number of working-tree status entries.

        Returns 0 without touching any collaborator when no repository is
        bound, and 0 when status is currently unavailable.
        """
        if self.repository is None:
            return 0
        snapshot = await self.status()
        return len(snapshot.status) if snapshot is not None else 0

    def on_output(self, listener: Listener[str]) -> Subscription:
        """Subscribe to live collaborator output.

        Output is only relayed while at least one subscription is open;
        chunks produced with no subscribers are not buffered.

        Raises:
            RepositoryUnavailableError: If no repository is bound.
        """
        self._require()
        assert self._relay is not None  # noqa: S101
        return self._relay.subscribe(listener)

    @property
    def output_subscriber_count(self) -> int:
        """Return the number of open on_output() subscriptions."""
        return self._relay.subscriber_count if self._relay is not None else 0

    # =========================================================================
    # Status Aggregation
    # =========================================================================

    async def status(self) -> RepositorySnapshot | None:
        """Aggregate a fresh snapshot of the repository.

        Returns:
            The snapshot, or None when status is currently unavailable.

        Raises:
            GitError: For a bad configuration file, or when the repository
                is not opened at its root. The collaborator's exception is
                re-raised unchanged.
            RepositoryUnavailableError: If no repository is bound.
        """
        repository = self._require()
        try:
            return await self._compute_status(repository)
        except Exception as e:
            if _is_fatal_status_error(e):
                raise
            if self._logger:
                self._logger.info("status_unavailable", error=str(e))
            return None

    async def _compute_status(
        self, repository: RepositoryProtocol
    ) -> RepositorySnapshot:
        assert self._root is not None  # noqa: S101
        status, head = await gather(
            repository.get_status,
            lambda: self._resolve_head(repository),
            prefer=_is_fatal_status_error,
        )
        root, refs, remotes = await gather(
            self._root.get_root,
            repository.get_refs,
            repository.get_remotes,
            prefer=_is_fatal_status_error,
        )
        return RepositorySnapshot(
            repository_root=root,
            status=tuple(status),
            head=head,
            refs=tuple(refs),
            remotes=tuple(remotes),
        )

    @staticmethod
    async def _resolve_head(repository: RepositoryProtocol) -> Ref | None:
        """Return HEAD enriched with branch metadata where possible."""
        try:
            head = await repository.get_head()
        except Exception:  # noqa: BLE001
            return None

        if head.name is None:
            return head

        try:
            return await repository.get_branch(head.name)
        except Exception:  # noqa: BLE001
            return head

    # =========================================================================
    # Mutating Operations
    # =========================================================================

    async def init(self) -> RepositorySnapshot | None:
        """Create a repository, then return fresh status."""
        await self._require().init()
        return await self.status()

    async def add(
        self, paths: Sequence[str] | None = None
    ) -> RepositorySnapshot | None:
        """Stage paths (everything when None), then return fresh status."""
        await self._require().add(paths)
        return await self.status()

    async def stage(self, path: str, content: str) -> RepositorySnapshot | None:
        """Stage explicit content for a path, then return fresh status."""
        await self._require().stage(path, content)
        return await self.status()

    async def branch(
        self, name: str, *, checkout: bool = False
    ) -> RepositorySnapshot | None:
        """Create a branch, optionally checking it out."""
        await self._require().branch(name, checkout=checkout)
        return await self.status()

    async def checkout(
        self, treeish: str | None = None, paths: Sequence[str] | None = None
    ) -> RepositorySnapshot | None:
        """Check out a treeish or restore paths, then return fresh status."""
        await self._require().checkout(treeish, paths)
        return await self.status()

    async def clean(self, paths: Sequence[str]) -> RepositorySnapshot | None:
        """Remove untracked paths, then return fresh status."""
        await self._require().clean(paths)
        return await self.status()

    async def undo(self) -> RepositorySnapshot | None:
        """Undo the last commit, then return fresh status."""
        await self._require().undo()
        return await self.status()

    async def reset(
        self, treeish: str, *, hard: bool = False
    ) -> RepositorySnapshot | None:
        """Reset to a treeish, then return fresh status."""
        await self._require().reset(treeish, hard=hard)
        return await self.status()

    async def revert_files(
        self, treeish: str, paths: Sequence[str] | None = None
    ) -> RepositorySnapshot | None:
        """Reset index entries for paths, then return fresh status."""
        await self._require().revert_files(treeish, paths)
        return await self.status()

    async def fetch(self) -> RepositorySnapshot | None:
        """Fetch from the default remote, then return fresh status.

        A repository without any remote is not an error: the fetch is
        treated as a no-op and status is returned as usual.
        """
        repository = self._require()
        try:
            await repository.fetch()
        except Exception as e:
            if not isinstance(classify(e, context=ErrorContext.FETCH), Suppressed):
                raise
            if self._logger:
                self._logger.info("fetch_no_remote", error=str(e))
        return await self.status()

    async def pull(self, *, rebase: bool = False) -> RepositorySnapshot | None:
        """Pull the current branch, then return fresh status."""
        await self._require().pull(rebase=rebase)
        return await self.status()

    async def push(
        self,
        remote: str | None = None,
        name: str | None = None,
        options: PushOptions | None = None,
    ) -> RepositorySnapshot | None:
        """Push a branch, then return fresh status."""
        await self._require().push(remote, name, options)
        return await self.status()

    async def sync(self) -> RepositorySnapshot | None:
        """Pull then push the current branch, then return fresh status."""
        await self._require().sync()
        return await self.status()

    async def commit(
        self, message: str, *, amend: bool = False, stage: bool = False
    ) -> RepositorySnapshot | None:
        """Record a commit, then return fresh status.

        Args:
            message: The commit message.
            amend: Replace the previous commit instead of adding one.
            stage: Stage every change before committing.
        """
        repository = self._require()
        if stage:
            await repository.add(None)
        await repository.commit(message, all_=stage, amend=amend)
        return await self.status()

    # =========================================================================
    # Content
    # =========================================================================

    async def show(self, file_path: str, treeish: str | None = None) -> str:
        """Return the full content of a file at a treeish.

        The whole object is buffered into memory. A path unknown at the
        given revision yields an empty string.

        Args:
            file_path: Path relative to the repository root.
            treeish: Revision to read from; empty, ``~`` or None read the
                working tree.

        Raises:
            RepositoryUnavailableError: If no repository is bound.
        """
        repository = self._require()
        object_name = f"{normalize_treeish(treeish)}:{file_path}"
        try:
            return await repository.buffer(object_name)
        except Exception as e:
            if not isinstance(classify(e, context=ErrorContext.CONTENT), Suppressed):
                raise
            if self._logger:
                self._logger.debug(
                    "show_untracked", object=object_name, error=str(e)
                )
            return ""

    async def detect_mimetypes(
        self, file_path: str, treeish: str | None = None
    ) -> list[str]:
        """Classify a file's content type.

        A file present in the working tree is sniffed from disk; otherwise
        its content at ``treeish`` is streamed from the collaborator.

        Args:
            file_path: Path relative to the repository root.
            treeish: Revision used when the file is absent from disk.

        Returns:
            Mime types, most specific first.
        """
        repository = self._require()
        on_disk = repository.path / file_path
        if await anyio.Path(on_disk).exists():
            return await detect_mimes_from_file(
                on_disk, sniff_bytes=self._sniff_bytes
            )

        object_name = f"{normalize_treeish(treeish)}:{file_path}"
        async with repository.show(object_name) as stream:
            return await detect_mimes_from_stream(
                stream, file_path, sniff_bytes=self._sniff_bytes
            )

    # =========================================================================
    # Commit Info
    # =========================================================================

    async def get_commit_info(self) -> RepositorySnapshot | None:
        """Return fresh status carrying commit message metadata.

        The template lookup and the previous message lookup never fail the
        call; each falls back to an empty string. Status failures behave
        exactly as in status().

        Returns:
            The snapshot with commit_info set, or None when status is
            currently unavailable.
        """
        repository = self._require()
        template_file, prev_commit_msg, snapshot = await gather(
            lambda: self._commit_template_path(repository),
            lambda: self._previous_commit_message(repository),
            self.status,
        )

        template = ""
        if template_file:
            template = await read_commit_template(
                template_file, repository.path, self._logger
            )

        if snapshot is None:
            return None
        return snapshot.with_commit_info(
            CommitInfo(template=template, prev_commit_msg=prev_commit_msg)
        )

    async def _commit_template_path(self, repository: RepositoryProtocol) -> str:
        try:
            result = await repository.run(["config", "--get", "commit.template"])
        except Exception as e:  # noqa: BLE001
            if self._logger:
                self._logger.debug("commit_template_lookup_failed", error=str(e))
            return ""
        return result.stdout.strip()

    async def _previous_commit_message(self, repository: RepositoryProtocol) -> str:
        try:
            return await repository.get_log(prev_count=1, format="%B")
        except Exception as e:  # noqa: BLE001
            if self._logger:
                self._logger.debug("previous_commit_message_failed", error=str(e))
            return ""
