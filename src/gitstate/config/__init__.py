"""Configuration loading and typed access.

Configuration is merged from, lowest to highest precedence: built-in
defaults, the user file (``~/.config/gitstate/config.toml`` on Linux), the
repository file (``<repo>/.gitstate.toml``), ``GITSTATE_SECTION__KEY``
environment variables, and command-line overrides.

Example:
    >>> from gitstate.config import Config
    >>> config = Config.load(repository_root=Path.cwd())
    >>> config.logging.level
    <LogLevel.INFO: 'info'>
"""

from gitstate.config._config import Config
from gitstate.config._defaults import DEFAULT_CONFIG
from gitstate.config._discovery import (
    discover_sources,
    get_repository_config_path,
    get_user_config_path,
)
from gitstate.config._load import safe_load_config
from gitstate.config._loader import (
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from gitstate.config._models import (
    ConfigSource,
    ConfigSourceName,
    GitConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from gitstate.config._validation import (
    ValidationIssue,
    raise_if_validation_errors,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "GitConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ValidationIssue",
    "deep_merge",
    "discover_sources",
    "get_repository_config_path",
    "get_user_config_path",
    "parse_env_vars",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
]
