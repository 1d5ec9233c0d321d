"""Classification of collaborator failures.

This module is the single translation point between errors raised by a
repository collaborator and the service's outcome policy. A failure is
classified once, in the context of the call that produced it:

| Context | Condition | Classification |
|---|---|---|
| STATUS | bad configuration file | Fatal |
| STATUS | not at repository root | Fatal |
| STATUS | anything else | Empty |
| FETCH | no remote repository configured | Suppressed |
| FETCH | anything else | Fatal |
| CONTENT | any GitError | Suppressed |
| CONTENT | anything else | Fatal |
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from gitstate.enums import GitErrorCode
from gitstate.exceptions import GitError


class ErrorContext(StrEnum):
    """The kind of collaborator call that failed."""

    STATUS = "status"
    FETCH = "fetch"
    CONTENT = "content"


@dataclass(frozen=True, slots=True)
class Fatal:
    """The failure must reach the caller with its original exception.

    Attributes:
        cause: The collaborator's exception, unchanged.
    """

    cause: Exception


@dataclass(frozen=True, slots=True)
class Suppressed:
    """The failure is an expected, benign condition.

    Attributes:
        cause: The collaborator's exception, kept for logging.
    """

    cause: Exception


@dataclass(frozen=True, slots=True)
class Empty:
    """The result is currently unknowable; report absence instead of failing.

    Attributes:
        cause: The collaborator's exception, kept for logging.
    """

    cause: Exception


type ClassifiedError = Fatal | Suppressed | Empty

_FATAL_STATUS_CODES: Final = frozenset(
    {GitErrorCode.BAD_CONFIG_FILE, GitErrorCode.NOT_AT_REPOSITORY_ROOT}
)


def _code_of(error: Exception) -> GitErrorCode | None:
    return error.code if isinstance(error, GitError) else None


def classify(error: Exception, *, context: ErrorContext) -> ClassifiedError:
    """Classify a collaborator failure.

    Args:
        error: The exception raised by the collaborator.
        context: The kind of call that raised it.

    Returns:
        Fatal, Suppressed or Empty wrapping the original exception.

    Example:
        >>> code = GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED
        >>> err = GitError("fetch failed", code=code)
        >>> classify(err, context=ErrorContext.FETCH)
        Suppressed(cause=...)
    """
    match context:
        case ErrorContext.STATUS:
            if _code_of(error) in _FATAL_STATUS_CODES:
                return Fatal(error)
            return Empty(error)
        case ErrorContext.FETCH:
            if _code_of(error) == GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED:
                return Suppressed(error)
            return Fatal(error)
        case ErrorContext.CONTENT:
            if isinstance(error, GitError):
                return Suppressed(error)
            return Fatal(error)
