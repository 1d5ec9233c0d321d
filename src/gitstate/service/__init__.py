"""Git service façade.

This package provides GitService, which drives a repository collaborator
and answers every mutating intent with a freshly aggregated snapshot, plus
the pieces it is built from.

Classes:
    GitService: The façade.
    RepositorySnapshot: Aggregate repository state at one point in time.
    CommitInfo: Commit template and previous commit message.
    RepositoryRootResolver: Resolve-once cell for the repository root.
    OutputRelay: Subscriber-count-gated relay of collaborator output.

Example:
    >>> from gitstate.service import create_service
    >>> service = await create_service(Path.cwd())
    >>> snapshot = await service.status()
"""

from gitstate.service._classify import (
    ClassifiedError,
    Empty,
    ErrorContext,
    Fatal,
    Suppressed,
    classify,
)
from gitstate.service._commit_info import read_commit_template, template_candidates
from gitstate.service._factory import create_service
from gitstate.service._models import CommitInfo, RepositorySnapshot
from gitstate.service._relay import OutputRelay
from gitstate.service._root import RepositoryRootResolver, RootState, canonical_path
from gitstate.service._service import GitService, normalize_treeish

__all__ = [
    "ClassifiedError",
    "CommitInfo",
    "Empty",
    "ErrorContext",
    "Fatal",
    "GitService",
    "OutputRelay",
    "RepositoryRootResolver",
    "RepositorySnapshot",
    "RootState",
    "Suppressed",
    "canonical_path",
    "classify",
    "create_service",
    "normalize_treeish",
    "read_commit_template",
    "template_candidates",
]
