"""The gitstate command-line interface."""

from ._app import create_app, main
from ._commands import register_commands, run_with_service
from ._context import CLIContext
from ._render import describe_head, render_commit_info, render_snapshot
from ._shared import ExitCode, exit_with_error, get_error_console

__all__ = [
    "CLIContext",
    "ExitCode",
    "create_app",
    "describe_head",
    "exit_with_error",
    "get_error_console",
    "main",
    "register_commands",
    "render_commit_info",
    "render_snapshot",
    "run_with_service",
]
