"""Repository collaborator models.

This module defines the structured results produced by a repository
collaborator. The service layer selects and combines these values but
never mutates them.
"""

from dataclasses import dataclass

from gitstate.enums import RefType


@dataclass(frozen=True, slots=True)
class FileStatus:
    """A single working-tree status entry.

    Attributes:
        x: Index (staged) status letter, e.g. "M", "A", "R", "?".
        y: Working-tree status letter.
        path: Repository-relative path.
        rename: Original path for renames and copies, None otherwise.
    """

    x: str
    y: str
    path: str
    rename: str | None = None

    @property
    def is_untracked(self) -> bool:
        """Return True for untracked entries."""
        return self.x == "?" and self.y == "?"


@dataclass(frozen=True, slots=True)
class Ref:
    """A git reference.

    Attributes:
        name: Short name ("main", "origin/main", "v1.0"), None when detached.
        commit: Target commit SHA hex string, None for an unborn branch.
        type: Kind of reference.
        remote: Remote name for remote-tracking refs.
        upstream: Upstream tracking ref short name, if configured.
        ahead: Commits ahead of upstream.
        behind: Commits behind upstream.
    """

    name: str | None
    commit: str | None = None
    type: RefType = RefType.HEAD
    remote: str | None = None
    upstream: str | None = None
    ahead: int | None = None
    behind: int | None = None


@dataclass(frozen=True, slots=True)
class Remote:
    """A configured remote.

    Attributes:
        name: Remote name, e.g. "origin".
        url: Fetch URL.
    """

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class PushOptions:
    """Options for push operations.

    Attributes:
        set_upstream: Record the pushed branch as the upstream (``-u``).
    """

    set_upstream: bool = False


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a git invocation that exited successfully.

    Attributes:
        exit_code: Process exit code.
        stdout: Decoded standard output.
        stderr: Decoded standard error.
    """

    exit_code: int
    stdout: str
    stderr: str
