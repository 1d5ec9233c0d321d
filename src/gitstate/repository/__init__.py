"""Git repository collaborators.

This package provides the asynchronous git collaborators that the service
layer drives, behind a runtime-checkable protocol.

Classes:
    GitRepository: Runs the git executable with anyio subprocesses.
    FakeRepository: In-memory implementation for tests.
    RepositoryProtocol: Runtime-checkable protocol for dependency injection.

Models:
    FileStatus: One working-tree status entry.
    Ref: A branch, remote-tracking ref or tag.
    Remote: A configured remote.
    PushOptions: Options for push operations.
    CommandResult: Output of a successful git invocation.

Example:
    >>> from gitstate.repository import GitRepository
    >>> repo = await GitRepository.open(Path.cwd())
    >>> head = await repo.get_head()
"""

from gitstate.repository._errors import error_code_from_output
from gitstate.repository._fake import FakeRepository
from gitstate.repository._git import GitExecutable, GitRepository, find_git
from gitstate.repository._models import (
    CommandResult,
    FileStatus,
    PushOptions,
    Ref,
    Remote,
)
from gitstate.repository._parse import (
    parse_ahead_behind,
    parse_refs,
    parse_remotes,
    parse_status,
)
from gitstate.repository._protocol import RepositoryProtocol

__all__ = [
    "CommandResult",
    "FakeRepository",
    "FileStatus",
    "GitExecutable",
    "GitRepository",
    "PushOptions",
    "Ref",
    "Remote",
    "RepositoryProtocol",
    "error_code_from_output",
    "find_git",
    "parse_ahead_behind",
    "parse_refs",
    "parse_remotes",
    "parse_status",
]
