# ruff: noqa: TC003  # Path needed at runtime for signatures
"""Commit message template lookup."""

from pathlib import Path
from typing import TYPE_CHECKING

import anyio

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def template_candidates(file: str, repository_path: Path) -> list[Path]:
    """Return the locations tried for a configured template path, in order.

    The path is tried verbatim first. When it contains ``~``, the first
    occurrence is then replaced with the repository's ``.git`` directory.

    Example:
        >>> template_candidates("~/msg.txt", Path("/work/repo"))
        [PosixPath('~/msg.txt'), PosixPath('/work/repo/.git/msg.txt')]
    """
    candidates = [Path(file)]
    if "~" in file:
        candidates.append(Path(file.replace("~", str(repository_path / ".git"), 1)))
    return candidates


async def read_commit_template(
    file: str,
    repository_path: Path,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> str:
    """Read the contents of a configured commit template.

    Never raises: a template that cannot be found or read yields an empty
    string. Templates configured only in global git configuration are not
    looked up.

    Args:
        file: Value of ``commit.template``.
        repository_path: Working directory of the repository.
        logger: Optional logger; if None, no logging is performed.

    Returns:
        The template text, or an empty string.
    """
    try:
        for candidate in template_candidates(file, repository_path):
            path = anyio.Path(candidate)
            if await path.exists():
                return await path.read_text()
    except (OSError, ValueError) as e:
        if logger:
            logger.warning("commit_template_read_failed", path=file, error=str(e))
        return ""

    if logger:
        logger.debug("commit_template_missing", path=file)
    return ""
