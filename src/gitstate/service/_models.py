# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Service snapshot models.

This module defines the immutable repository snapshot returned by the git
service after every status-producing call.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Self

from gitstate.repository._models import FileStatus, Ref, Remote


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Commit message metadata.

    Attributes:
        template: Contents of the configured commit template, possibly empty.
        prev_commit_msg: Message of the most recent commit, possibly empty.
    """

    template: str = ""
    prev_commit_msg: str = ""


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """Aggregate repository state at one point in time.

    Attributes:
        repository_root: Canonical path of the working tree root.
        status: Working-tree status entries in git's order.
        head: Current branch (enriched with tracking info when available)
            or detached commit; None when HEAD could not be resolved.
        refs: All branches, remote-tracking refs and tags.
        remotes: All configured remotes.
        commit_info: Commit message metadata, only set by get_commit_info().
    """

    repository_root: Path
    status: tuple[FileStatus, ...]
    head: Ref | None
    refs: tuple[Ref, ...]
    remotes: tuple[Remote, ...]
    commit_info: CommitInfo | None = None

    def with_commit_info(self, commit_info: CommitInfo) -> Self:
        """Return a copy of this snapshot carrying commit metadata."""
        return replace(self, commit_info=commit_info)
