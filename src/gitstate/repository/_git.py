# ruff: noqa: TC001, TC002, TC003  # Names needed at runtime for signatures
"""Git repository backed by the git executable.

This module provides GitRepository, the concrete collaborator that runs the
git binary with anyio subprocesses, parses its output into repository models
and translates failures into GitError with a well-known error code.
"""

import contextlib
import os
import re
import subprocess
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Self, final

import anyio
from anyio.abc import ByteReceiveStream

from gitstate.enums import GitErrorCode, RefType
from gitstate.events import Emitter, Listener, Subscription
from gitstate.exceptions import GitError, GitNotFoundError
from gitstate.repository._errors import error_code_from_output
from gitstate.repository._models import (
    CommandResult,
    FileStatus,
    PushOptions,
    Ref,
    Remote,
)
from gitstate.repository._parse import (
    parse_ahead_behind,
    parse_refs,
    parse_remotes,
    parse_status,
)

_VERSION_PATTERN: Final = re.compile(r"git version\s+(\S+)")

# Messages that mean "nothing to undo past the root commit"
_NO_PARENT_PATTERN: Final = re.compile(r"ambiguous argument 'HEAD~'|unknown revision")

_NO_MATCHING_FILES: Final = "did not match any file(s) known to git"

_DEFAULT_FILE_MODE: Final = "100644"


@dataclass(frozen=True, slots=True)
class GitExecutable:
    """A located git executable.

    Attributes:
        path: Command or absolute path used to invoke git.
        version: Version string reported by ``git --version``.
    """

    path: str
    version: str


async def find_git(hint: str | None = None) -> GitExecutable:
    """Locate a usable git executable.

    Args:
        hint: Command name or path to try. Defaults to ``git`` on PATH.

    Returns:
        The located executable and its version.

    Raises:
        GitNotFoundError: If the executable cannot be run.
    """
    command = hint or "git"
    try:
        completed = await anyio.run_process([command, "--version"], check=False)
    except OSError as e:
        msg = f"Git executable not found: {command}"
        raise GitNotFoundError(
            msg, code=GitErrorCode.GIT_NOT_FOUND, command=("--version",)
        ) from e

    stdout = completed.stdout.decode("utf-8", errors="replace")
    if completed.returncode != 0:
        msg = f"Git executable is not usable: {command}"
        raise GitNotFoundError(
            msg,
            code=GitErrorCode.GIT_NOT_FOUND,
            command=("--version",),
            exit_code=completed.returncode,
            stdout=stdout,
            stderr=completed.stderr.decode("utf-8", errors="replace"),
        )

    match = _VERSION_PATTERN.search(stdout)
    version = match.group(1) if match else stdout.strip()
    return GitExecutable(path=command, version=version)


@final
class GitRepository:
    """Runs git commands against a single working directory.

    Every invocation fires ``git <args>`` followed by any stderr text on the
    output event. Failed invocations raise GitError; the error code is
    inferred from the command output where git's message is recognized.

    Example:
        >>> repo = await GitRepository.open(Path("/work/project"))
        >>> entries = await repo.get_status()
    """

    __slots__ = ("_env", "_git_path", "_on_output", "_path", "_version")

    def __init__(
        self,
        path: Path,
        *,
        git_path: str = "git",
        version: str = "",
        env: dict[str, str] | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            path: Working directory to run commands in.
            git_path: Command or absolute path used to invoke git.
            version: Version string of the executable.
            env: Extra environment variables for every invocation.
        """
        self._path = path
        self._git_path = git_path
        self._version = version
        self._env = {
            **os.environ,
            "LC_ALL": "C",
            "GIT_TERMINAL_PROMPT": "0",
            **(env or {}),
        }
        self._on_output: Emitter[str] = Emitter()

    @classmethod
    async def open(cls, path: Path, *, git_path: str | None = None) -> Self:
        """Locate git and bind a repository to ``path``.

        Raises:
            GitNotFoundError: If no git executable can be run.
        """
        executable = await find_git(git_path)
        return cls(path, git_path=executable.path, version=executable.version)

    @property
    def path(self) -> Path:
        """Working directory the repository is bound to."""
        return self._path

    @property
    def version(self) -> str:
        """Version string of the git executable."""
        return self._version

    def on_output(self, listener: Listener[str]) -> Subscription:
        """Subscribe to raw command output chunks."""
        return self._on_output.subscribe(listener)

    # =========================================================================
    # Process Execution
    # =========================================================================

    async def _exec(
        self,
        args: Sequence[str],
        *,
        stdin: bytes | None = None,
    ) -> CommandResult:
        """Run git and raise GitError on a non-zero exit.

        Args:
            args: Arguments following the git executable.
            stdin: Optional data piped to the process.

        Returns:
            CommandResult with decoded output.

        Raises:
            GitError: If the process cannot be started or exits non-zero.
        """
        self._on_output.fire(f"git {' '.join(args)}\n")

        try:
            completed = await anyio.run_process(
                [self._git_path, *args],
                input=stdin,
                cwd=self._path,
                env=self._env,
                check=False,
            )
        except OSError as e:
            msg = f"Failed to run git {args[0] if args else ''}: {e}"
            raise GitError(
                msg, code=GitErrorCode.CANT_OPEN_RESOURCE, command=args
            ) from e

        stdout = completed.stdout.decode("utf-8", errors="replace")
        stderr = completed.stderr.decode("utf-8", errors="replace")
        if stderr:
            self._on_output.fire(stderr)

        if completed.returncode != 0:
            msg = f"Failed to execute git {args[0] if args else ''}"
            raise GitError(
                msg,
                code=error_code_from_output(stderr, stdout),
                command=args,
                exit_code=completed.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return CommandResult(
            exit_code=completed.returncode, stdout=stdout, stderr=stderr
        )

    async def _ensure_repository_root(self) -> None:
        """Raise unless the bound path is the top level of its working tree."""
        result = await self._exec(["rev-parse", "--show-toplevel"])
        toplevel = await anyio.Path(result.stdout.strip()).resolve()
        bound = await anyio.Path(self._path).resolve()
        if toplevel != bound:
            msg = f"Not at repository root: {bound} (root is {toplevel})"
            raise GitError(
                msg,
                code=GitErrorCode.NOT_AT_REPOSITORY_ROOT,
                command=("rev-parse", "--show-toplevel"),
                exit_code=0,
                stdout=result.stdout,
            )

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_status(self) -> list[FileStatus]:
        """Return working-tree status entries."""
        await self._ensure_repository_root()
        result = await self._exec(["status", "-z", "-u"])
        return parse_status(result.stdout)

    async def get_head(self) -> Ref:
        """Return the current branch, or the detached commit."""
        try:
            result = await self._exec(["symbolic-ref", "--short", "HEAD"])
        except GitError:
            result = None

        if result is not None and result.stdout.strip():
            return Ref(name=result.stdout.strip(), type=RefType.HEAD)

        detached = await self._exec(["rev-parse", "HEAD"])
        return Ref(name=None, commit=detached.stdout.strip(), type=RefType.HEAD)

    async def get_branch(self, name: str) -> Ref:
        """Return a local branch with upstream and ahead/behind counts."""
        if name == "HEAD":
            return await self.get_head()

        result = await self._exec(["rev-parse", name])
        commit = result.stdout.strip()

        try:
            tracking = await self._exec(
                ["rev-parse", "--symbolic-full-name", "--abbrev-ref", f"{name}@{{u}}"]
            )
        except GitError:
            # No upstream configured
            return Ref(name=name, commit=commit, type=RefType.HEAD)

        upstream = tracking.stdout.strip() or None
        ahead: int | None = None
        behind: int | None = None
        if upstream is not None:
            counts = await self._exec(
                ["rev-list", "--left-right", "--count", f"{name}...{upstream}"]
            )
            parsed = parse_ahead_behind(counts.stdout)
            if parsed is not None:
                ahead, behind = parsed

        return Ref(
            name=name,
            commit=commit,
            type=RefType.HEAD,
            upstream=upstream,
            ahead=ahead,
            behind=behind,
        )

    async def get_refs(self) -> list[Ref]:
        """Return all branches, remote-tracking refs and tags."""
        result = await self._exec(
            ["for-each-ref", "--format", "%(refname) %(objectname)"]
        )
        return parse_refs(result.stdout)

    async def get_remotes(self) -> list[Remote]:
        """Return all configured remotes."""
        result = await self._exec(["remote", "--verbose"])
        return parse_remotes(result.stdout)

    async def run(self, args: Sequence[str]) -> CommandResult:
        """Run an arbitrary git command."""
        return await self._exec(args)

    async def get_log(self, *, prev_count: int = 32, format: str = "") -> str:  # noqa: A002
        """Return ``git log`` output for the most recent commits."""
        args = ["log", f"-{prev_count}"]
        if format:
            args.append(f"--format={format}")
        result = await self._exec(args)
        return result.stdout

    async def buffer(self, object_name: str) -> str:
        """Return the full content of an object. Buffers it into memory."""
        result = await self._exec(["show", object_name])
        return result.stdout

    @asynccontextmanager
    async def show(self, object_name: str) -> AsyncIterator[ByteReceiveStream]:
        """Open a byte stream over an object's content.

        The process is killed when the context exits, so callers may stop
        reading early.

        Raises:
            GitError: If the process cannot be started.
        """
        self._on_output.fire(f"git show {object_name}\n")
        try:
            process = await anyio.open_process(
                [self._git_path, "show", object_name],
                cwd=self._path,
                env=self._env,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            msg = f"Failed to run git show: {e}"
            raise GitError(
                msg, code=GitErrorCode.CANT_OPEN_RESOURCE, command=("show", object_name)
            ) from e

        try:
            if process.stdout is None:  # pragma: no cover - stdout is always piped
                msg = "git show produced no stdout pipe"
                raise GitError(msg, command=("show", object_name))
            yield process.stdout
        finally:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
            with anyio.CancelScope(shield=True):
                await process.aclose()

    # =========================================================================
    # Mutations
    # =========================================================================

    async def init(self) -> None:
        """Create an empty repository."""
        await self._exec(["init"])

    async def add(self, paths: Sequence[str] | None = None) -> None:
        """Stage paths including deletions, or everything when None."""
        await self._exec(["add", "-A", "--", *(paths or ["."])])

    async def stage(self, path: str, content: str) -> None:
        """Stage content for a path without writing the working-tree file."""
        hashed = await self._exec(
            ["hash-object", "--stdin", "-w", "--path", path], stdin=content.encode()
        )
        sha = hashed.stdout.strip()

        mode = _DEFAULT_FILE_MODE
        try:
            tree = await self._exec(["ls-tree", "HEAD", "--", path])
        except GitError:
            # Unborn branch: nothing to inherit a mode from
            tree = None
        if tree is not None and tree.stdout.split():
            mode = tree.stdout.split()[0]

        await self._exec(["update-index", "--add", "--cacheinfo", mode, sha, path])

    async def branch(self, name: str, *, checkout: bool = False) -> None:
        """Create a branch, optionally checking it out."""
        if checkout:
            await self._exec(["checkout", "-q", "-b", name])
        else:
            await self._exec(["branch", "-q", name])

    async def checkout(
        self, treeish: str | None = None, paths: Sequence[str] | None = None
    ) -> None:
        """Check out a treeish, or restore paths from it."""
        args = ["checkout", "-q"]
        if treeish:
            args.append(treeish)
        if paths:
            args.extend(["--", *paths])
        await self._exec(args)

    async def clean(self, paths: Sequence[str]) -> None:
        """Remove untracked paths."""
        await self._exec(["clean", "-f", "-q", "--", *paths])

    async def undo(self) -> None:
        """Undo the last commit; removes HEAD when it is the root commit."""
        try:
            await self._exec(["reset", "--soft", "HEAD~"])
        except GitError as e:
            if not _NO_PARENT_PATTERN.search(e.stderr):
                raise
            await self._exec(["update-ref", "-d", "HEAD"])

    async def reset(self, treeish: str, *, hard: bool = False) -> None:
        """Reset the current branch to a treeish."""
        args = ["reset"]
        if hard:
            args.append("--hard")
        args.append(treeish)
        await self._exec(args)

    async def revert_files(
        self, treeish: str, paths: Sequence[str] | None = None
    ) -> None:
        """Reset index entries for paths to a treeish."""
        branches = await self._exec(["branch"])
        if branches.stdout.strip():
            args = ["reset", "-q", treeish, "--"]
        else:
            # No commits yet: unstaging means removing from the index
            args = ["rm", "--cached", "-r", "--"]
        args.extend(paths or ["."])

        try:
            await self._exec(args)
        except GitError as e:
            if _NO_MATCHING_FILES not in e.stderr:
                raise

    async def fetch(self) -> None:
        """Fetch from the default remote."""
        await self._exec(["fetch"])

    async def pull(self, *, rebase: bool = False) -> None:
        """Pull from the upstream of the current branch."""
        args = ["pull"]
        if rebase:
            args.append("--rebase")
        await self._exec(args)

    async def push(
        self,
        remote: str | None = None,
        name: str | None = None,
        options: PushOptions | None = None,
    ) -> None:
        """Push a branch to a remote."""
        args = ["push"]
        if options is not None and options.set_upstream:
            args.append("-u")
        if remote:
            args.append(remote)
        if name:
            args.append(name)
        await self._exec(args)

    async def sync(self) -> None:
        """Pull then push the current branch; no-op without an upstream."""
        head = await self.get_head()
        if head.name is None:
            return

        branch = await self.get_branch(head.name)
        if branch.upstream is None:
            return

        await self.pull()
        remote, _, merge_branch = branch.upstream.partition("/")
        await self.push(remote, f"{head.name}:{merge_branch}")

    async def commit(
        self, message: str, *, all_: bool = False, amend: bool = False
    ) -> None:
        """Record a commit with the message read from stdin."""
        args = ["commit", "--quiet", "--allow-empty-message", "--file", "-"]
        if all_:
            args.append("--all")
        if amend:
            args.append("--amend")
        await self._exec(args, stdin=message.encode())
