# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
# ruff: noqa: TC003  # Path needed at runtime for signatures
"""Configuration container with typed access.

This module provides the Config class, the primary interface for reading
gitstate configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr

from gitstate.config._defaults import DEFAULT_CONFIG
from gitstate.config._discovery import discover_sources
from gitstate.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from gitstate.config._models import (
    ConfigSource,
    ConfigSourceName,
    GitConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from gitstate.config._validation import raise_if_validation_errors, validate_config


def _parse_log_level(value: str) -> LogLevel:
    """Parse a log level string, defaulting to INFO for invalid values."""
    try:
        return LogLevel(value)
    except ValueError:
        return LogLevel.INFO


def _parse_log_format(value: str) -> LogFormat:
    """Parse a log format string, defaulting to JSON for invalid values."""
    try:
        return LogFormat(value)
    except ValueError:
        return LogFormat.JSON


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_log_level(data.get("level", "info")),
        format=_parse_log_format(data.get("format", "json")),
        file=data.get("file", ""),
    )


def _parse_git(data: dict[str, Any]) -> GitConfig:
    return GitConfig(
        path=data.get("path", ""),
        sniff_bytes=data.get("sniff_bytes", 512),
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Instances are immutable. Use the factory methods from_dict(),
    from_file() or load() rather than the constructor.

    Example:
        >>> config = Config.from_dict({"git": {"sniff_bytes": 1024}})
        >>> config.git.sniff_bytes
        1024
        >>> config.get("logging.level")
        'info'
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _git: GitConfig = PrivateAttr(default_factory=GitConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _logging: LoggingConfig | None = None,
        _git: GitConfig | None = None,
    ) -> None:
        """Initialize configuration container.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _logging: Parsed logging configuration section.
            _git: Parsed git configuration section.
        """
        super().__init__()
        self._data = _data if _data is not None else {}
        self._sources = _sources
        self._logging = _logging if _logging is not None else LoggingConfig()
        self._git = _git if _git is not None else GitConfig()

    @classmethod
    def _from_merged(
        cls, merged: dict[str, Any], sources: tuple[ConfigSource, ...]
    ) -> Self:
        return cls(
            _data=merged,
            _sources=sources,
            _logging=_parse_logging(merged.get("logging", {})),
            _git=_parse_git(merged.get("git", {})),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged))
        return cls._from_merged(merged, ())

    @classmethod
    def from_file(cls, path: Path, *, validate: bool = True) -> Self:
        """Load configuration from a single TOML file.

        Args:
            path: Path to the TOML config file.
            validate: Whether to validate the loaded config.

        Returns:
            Configuration from the file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.REPOSITORY, path=path, exists=True, values=data
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged), source=str(path))

        return cls._from_merged(merged, (source,))

    @classmethod
    def load(
        cls,
        *,
        repository_root: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order: defaults, user file,
        repository file, environment, CLI overrides.

        Args:
            repository_root: Repository whose ``.gitstate.toml`` is read.
            include_env: Include ``GITSTATE_*`` environment variables.
            include_cli: Include CLI overrides.
            cli_overrides: CLI argument overrides, used if include_cli is True.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        sources = discover_sources(
            repository_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        # Discovered highest-to-lowest; merge lowest first
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name in (ConfigSourceName.DEFAULT, ConfigSourceName.CLI):
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        raise_if_validation_errors(validate_config(merged))

        return cls._from_merged(merged, tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed, highest precedence first."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def git(self) -> GitConfig:
        """Return the git configuration section."""
        return self._git

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get[T](self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("git.sniff_bytes")
            512
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged configuration."""
        return copy_value(self._data)
