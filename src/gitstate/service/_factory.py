# ruff: noqa: TC001, TC003  # Names needed at runtime for signatures
"""Service construction from configuration."""

from pathlib import Path
from typing import TYPE_CHECKING

from gitstate.config import Config
from gitstate.exceptions import GitNotFoundError
from gitstate.repository import GitRepository, find_git
from gitstate.service._service import GitService

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


async def create_service(
    path: Path,
    config: Config | None = None,
    *,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> GitService:
    """Build a GitService for a working directory.

    When no usable git executable is found the service is created without
    a repository, reporting `ServiceState.VCS_NOT_FOUND`.

    Args:
        path: Working directory of the repository.
        config: Loaded configuration; defaults when None.
        logger: Optional logger handed to the service.

    Returns:
        The service, bound to a GitRepository when git is available.
    """
    effective = config if config is not None else Config.from_dict({})

    try:
        executable = await find_git(effective.git.path or None)
    except GitNotFoundError as e:
        if logger:
            logger.warning("git_not_found", error=str(e))
        return GitService(None, logger=logger)

    if logger:
        logger.debug("git_found", git_path=executable.path, version=executable.version)

    repository = GitRepository(
        path, git_path=executable.path, version=executable.version
    )
    return GitService(
        repository, logger=logger, sniff_bytes=effective.git.sniff_bytes
    )
