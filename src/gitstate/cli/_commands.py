# pyright: reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""gitstate commands."""

from collections.abc import Awaitable, Callable
from importlib.metadata import version as package_version
from typing import TYPE_CHECKING, Annotated, Final

import anyio
from cyclopts import Parameter

from gitstate.enums import GitErrorCode, ServiceState
from gitstate.exceptions import GitError, GitNotFoundError, RepositoryUnavailableError
from gitstate.service import GitService, create_service
from gitstate.utils import create_service_logger

from ._context import CLIContext
from ._render import render_commit_info, render_config, render_snapshot
from ._shared import ExitCode, exit_with_error

if TYPE_CHECKING:
    from cyclopts import App

__all__ = ["register_commands"]

_MISSING: Final = object()


def run_with_service[T](
    ctx: CLIContext,
    operation: Callable[[GitService], Awaitable[T]],
    *,
    require_git: bool = True,
) -> T:
    """Build a service for the context's repository and run one operation.

    With ``--verbose`` every git invocation and its stderr are streamed to
    the error console while the operation runs.

    Raises:
        SystemExit: NOT_FOUND when git is missing, GIT_ERROR when git fails.
    """

    async def _main() -> T:
        logger = create_service_logger(
            ctx.config.logging.level.value,
            log_format=ctx.config.logging.format.value,  # type: ignore[arg-type]
            log_file=ctx.config.logging.file,
            repository=str(ctx.working_directory),
        )
        service = await create_service(ctx.working_directory, ctx.config, logger=logger)
        if require_git and await service.service_state() == ServiceState.VCS_NOT_FOUND:
            msg = "git executable not found"
            raise GitNotFoundError(msg, code=GitErrorCode.GIT_NOT_FOUND)

        subscription = None
        if ctx.verbose and service.repository is not None:
            subscription = service.on_output(
                lambda chunk: ctx.error_console.out(chunk, end="", highlight=False)
            )
        try:
            return await operation(service)
        finally:
            if subscription is not None:
                subscription.close()

    try:
        return anyio.run(_main)
    except (GitNotFoundError, RepositoryUnavailableError) as e:
        if ctx.logger:
            ctx.logger.warning("git_unavailable", error=str(e))
        exit_with_error(str(e), ExitCode.NOT_FOUND, console=ctx.error_console)
    except GitError as e:
        if ctx.logger:
            ctx.logger.error("git_failed", error=str(e), code=e.code, stderr=e.stderr)
        message = e.stderr.strip() or str(e)
        exit_with_error(message, ExitCode.GIT_ERROR, console=ctx.error_console)


def register_commands(app: "App") -> None:  # noqa: UP037
    """Register every gitstate command on an App."""

    @app.command(name="status")
    def _status() -> None:
        """Show working tree status, HEAD, refs and remotes"""
        ctx = CLIContext.get_current()
        snapshot = run_with_service(ctx, lambda service: service.status())
        if snapshot is None:
            ctx.console.print("[dim]Status is currently unavailable[/dim]")
            return
        render_snapshot(ctx.console, snapshot)

    @app.command(name="commit-info")
    def _commit_info() -> None:
        """Show status with the commit template and previous commit message"""
        ctx = CLIContext.get_current()
        snapshot = run_with_service(ctx, lambda service: service.get_commit_info())
        if snapshot is None or snapshot.commit_info is None:
            ctx.console.print("[dim]Status is currently unavailable[/dim]")
            return
        render_snapshot(ctx.console, snapshot)
        render_commit_info(ctx.console, snapshot.commit_info)

    @app.command(name="show")
    def _show(
        path: str,
        treeish: Annotated[
            str | None, Parameter(help="Revision to read (default: working tree)")
        ] = None,
    ) -> None:
        """Print the content of a file at a revision

        Args:
            path: File path relative to the repository root.
            treeish: Revision to read from.
        """
        ctx = CLIContext.get_current()
        content = run_with_service(ctx, lambda service: service.show(path, treeish))
        ctx.console.out(content, end="", highlight=False)

    @app.command(name="mimetypes")
    def _mimetypes(
        path: str,
        treeish: Annotated[
            str | None, Parameter(help="Revision used when the file is not on disk")
        ] = None,
    ) -> None:
        """Print the detected content types of a file

        Args:
            path: File path relative to the repository root.
            treeish: Revision used when the file is not on disk.
        """
        ctx = CLIContext.get_current()
        mimes = run_with_service(
            ctx, lambda service: service.detect_mimetypes(path, treeish)
        )
        for mime in mimes:
            ctx.console.out(mime, highlight=False)

    @app.command(name="fetch")
    def _fetch() -> None:
        """Fetch from the default remote, then show status"""
        ctx = CLIContext.get_current()
        snapshot = run_with_service(ctx, lambda service: service.fetch())
        if snapshot is None:
            ctx.console.print("[dim]Status is currently unavailable[/dim]")
            return
        render_snapshot(ctx.console, snapshot)

    @app.command(name="version")
    def _version() -> None:
        """Show gitstate and git versions"""
        ctx = CLIContext.get_current()
        git_version = run_with_service(
            ctx, lambda service: service.get_version(), require_git=False
        )
        ctx.console.out(f"gitstate {package_version('gitstate')}", highlight=False)
        ctx.console.out(f"git {git_version or '(not found)'}", highlight=False)

    @app.command(name="config")
    def _config(key: str | None = None) -> None:
        """Show the effective configuration, or one value by dotted key

        Args:
            key: Dotted key such as ``git.sniff_bytes``.
        """
        ctx = CLIContext.get_current()
        if key is None:
            render_config(ctx.console, ctx.config)
            return

        value = ctx.config.get(key, _MISSING)
        if value is _MISSING:
            exit_with_error(
                f"Unknown configuration key: {key}",
                ExitCode.NOT_FOUND,
                console=ctx.error_console,
            )
        if isinstance(value, dict):
            ctx.console.print_json(data=value)
        else:
            ctx.console.out(str(value), highlight=False)
