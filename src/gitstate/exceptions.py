# ruff: noqa: TC003  # Sequence and Path needed at runtime for signatures
"""gitstate exceptions."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from gitstate.enums import GitErrorCode


class GitStateError(Exception):
    """Base exception for gitstate errors."""


# =============================================================================
# Git Exceptions
# =============================================================================


class GitError(GitStateError):
    """Raised when a git invocation fails.

    Attributes:
        code: Well-known failure condition inferred from stderr, if any.
        command: The git arguments that were executed.
        exit_code: Process exit code, or None if the process never ran.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    def __init__(
        self,
        message: str,
        *,
        code: GitErrorCode | None = None,
        command: Sequence[str] = (),
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Initialize with error message and command context."""
        super().__init__(message)
        self.code: GitErrorCode | None = code
        self.command: tuple[str, ...] = tuple(command)
        self.exit_code: int | None = exit_code
        self.stdout: str = stdout
        self.stderr: str = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.code is None:
            return base
        return f"{base} ({self.code})"


class GitNotFoundError(GitError):
    """Raised when no usable git executable can be located."""


class RepositoryUnavailableError(GitStateError):
    """Raised when an operation needs a repository but none is bound."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitStateError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
