# ruff: noqa: TC003  # Path needed at runtime for signatures
"""Configuration path discovery.

This module determines the platform-specific user configuration file and
the per-repository configuration file, and lists every source in
precedence order.
"""

from pathlib import Path
from typing import Any, Final

import platformdirs

from gitstate.config._defaults import DEFAULT_CONFIG
from gitstate.config._models import ConfigSource, ConfigSourceName

APP_NAME: Final = "gitstate"

REPOSITORY_CONFIG_NAME: Final = ".gitstate.toml"


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/gitstate/config.toml``
    - macOS: ``~/Library/Application Support/gitstate/config.toml``
    - Windows: ``%APPDATA%\gitstate\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path(APP_NAME) / "config.toml"


def get_repository_config_path(repository_root: Path) -> Path:
    """Return the configuration file path inside a repository."""
    return repository_root / REPOSITORY_CONFIG_NAME


def _file_exists(path: Path) -> bool:
    """Check if a file exists, treating permission errors as absence."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    repository_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    File-based sources are checked for existence but not read.

    Args:
        repository_root: Repository whose ``.gitstate.toml`` is considered.
            The repository source is omitted when None.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: CLI argument overrides, used if include_cli is True.

    Returns:
        ConfigSource objects in precedence order (highest first). Sources
        that don't exist are included with exists=False.
    """
    sources: list[ConfigSource] = []

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        # Values are parsed during loading
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    if repository_root is not None:
        repository_path = get_repository_config_path(repository_root)
        sources.append(
            ConfigSource(
                name=ConfigSourceName.REPOSITORY,
                path=repository_path,
                exists=_file_exists(repository_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
