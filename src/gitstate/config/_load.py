"""Configuration loading for command-line entry points."""

import os
import sys
from pathlib import Path

from gitstate.config._config import Config
from gitstate.exceptions import ConfigError


def _fail_or_warn(error_msg: str, *, strict: bool) -> tuple[Config, str]:
    if strict:
        print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), error_msg


def safe_load_config(
    *,
    config_path: Path | None = None,
    repository_root: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Errors are handled based on the GITSTATE_STRICT_CONFIG environment
    variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        repository_root: Repository whose ``.gitstate.toml`` is read.
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("GITSTATE_STRICT_CONFIG", "0") == "1"

    try:
        if config_path is not None:
            if not config_path.exists():
                print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
                sys.exit(1)
            return Config.from_file(config_path), None

        config = Config.load(
            repository_root=repository_root,
            include_env=True,
            include_cli=cli_overrides is not None,
            cli_overrides=cli_overrides,
        )
    except ConfigError as e:
        return _fail_or_warn(f"Failed to load config: {e}", strict=strict_mode)
    except OSError as e:
        return _fail_or_warn(f"Failed to load config: {e}", strict=strict_mode)
    else:
        return config, None
