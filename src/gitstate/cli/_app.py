"""The command-line interface for gitstate."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitstate.config import safe_load_config
from gitstate.utils import create_cli_logger

from ._commands import register_commands
from ._context import CLIContext

_HELP = "Inspect a git repository through the gitstate service."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the gitstate CLI.

    Global options are handled by ``app.meta``; invoke ``app.meta(tokens)``
    to run a command with them.

    Args:
        console: Console for command output.
        error_console: Console for errors and streamed git output.
        exit_on_error: Exit on argument parsing errors.

    Returns:
        The configured App.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitstate",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[
            bool, Parameter(help="Stream git command output to stderr")
        ] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        repo: Annotated[
            Path | None, Parameter(name="--repo", help="Repository working directory")
        ] = None,
    ) -> None:
        """Launch gitstate with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Stream git command output to stderr.
            config: Explicit path to config file.
            repo: Repository working directory (default: current directory).
        """
        repository_root = repo if repo is not None else Path.cwd()

        loaded_config, config_error = safe_load_config(
            config_path=config,
            repository_root=repository_root,
        )

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            repository_root=repository_root,
            config_error=config_error,
            console=console,
            error_console=error_console,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `gitstate` CLI."""
    app = create_app()
    app.meta()
