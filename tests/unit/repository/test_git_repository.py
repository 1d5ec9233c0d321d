"""Unit tests for GitRepository with a mocked subprocess runner."""

import subprocess
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from pytest_mock import MockerFixture

from gitstate.enums import GitErrorCode, RefType
from gitstate.exceptions import GitError, GitNotFoundError
from gitstate.repository import GitRepository, PushOptions, Ref, find_git

pytestmark = pytest.mark.anyio


def _completed(
    stdout: str = "", stderr: str = "", returncode: int = 0
) -> subprocess.CompletedProcess[bytes]:
    return subprocess.CompletedProcess(
        [], returncode, stdout=stdout.encode(), stderr=stderr.encode()
    )


def _argv(run: AsyncMock) -> list[list[str]]:
    """Return the git arguments (without the executable) of every call."""
    return [list(call.args[0][1:]) for call in run.call_args_list]


@pytest.fixture
def run(mocker: MockerFixture) -> AsyncMock:
    return mocker.patch("anyio.run_process", new=mocker.AsyncMock())


@pytest.fixture
def repo(tmp_path: Path) -> GitRepository:
    return GitRepository(tmp_path, version="2.45.0")


# =============================================================================
# Executable Discovery
# =============================================================================


class TestFindGit:
    async def test_parses_version(self, run: AsyncMock) -> None:
        run.return_value = _completed("git version 2.45.1\n")

        executable = await find_git()

        assert executable.path == "git"
        assert executable.version == "2.45.1"

    async def test_uses_hint(self, run: AsyncMock) -> None:
        run.return_value = _completed("git version 2.39.0 (Apple Git-143)\n")

        executable = await find_git("/opt/git/bin/git")

        assert run.call_args.args[0] == ["/opt/git/bin/git", "--version"]
        assert executable.version == "2.39.0"

    async def test_missing_executable(self, run: AsyncMock) -> None:
        run.side_effect = FileNotFoundError("git")

        with pytest.raises(GitNotFoundError) as exc_info:
            _ = await find_git()

        assert exc_info.value.code == GitErrorCode.GIT_NOT_FOUND

    async def test_unusable_executable(self, run: AsyncMock) -> None:
        run.return_value = _completed(stderr="broken", returncode=1)

        with pytest.raises(GitNotFoundError) as exc_info:
            _ = await find_git()

        assert exc_info.value.exit_code == 1
        assert exc_info.value.stderr == "broken"


# =============================================================================
# Process Execution
# =============================================================================


class TestExecution:
    async def test_runs_in_repository_with_stable_locale(
        self, repo: GitRepository, run: AsyncMock, tmp_path: Path
    ) -> None:
        run.return_value = _completed("origin\thttps://x (fetch)\n")

        _ = await repo.get_remotes()

        kwargs = run.call_args.kwargs
        assert kwargs["cwd"] == tmp_path
        assert kwargs["env"]["LC_ALL"] == "C"
        assert kwargs["env"]["GIT_TERMINAL_PROMPT"] == "0"
        assert kwargs["check"] is False

    async def test_output_event_carries_command_and_stderr(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.return_value = _completed(stderr="From origin\n")
        seen: list[str] = []
        _ = repo.on_output(seen.append)

        await repo.fetch()

        assert seen == ["git fetch\n", "From origin\n"]

    async def test_failure_carries_code_and_output(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.return_value = _completed(
            stderr="fatal: No remote repository specified.\n", returncode=128
        )

        with pytest.raises(GitError) as exc_info:
            await repo.fetch()

        error = exc_info.value
        assert error.code == GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED
        assert error.command == ("fetch",)
        assert error.exit_code == 128
        assert "No remote repository" in error.stderr

    async def test_unrecognized_failure_has_no_code(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.return_value = _completed(stderr="fatal: odd\n", returncode=1)

        with pytest.raises(GitError) as exc_info:
            await repo.init()

        assert exc_info.value.code is None

    async def test_spawn_failure(self, repo: GitRepository, run: AsyncMock) -> None:
        run.side_effect = PermissionError("denied")

        with pytest.raises(GitError) as exc_info:
            await repo.init()

        assert exc_info.value.code == GitErrorCode.CANT_OPEN_RESOURCE
        assert exc_info.value.exit_code is None


# =============================================================================
# Reads
# =============================================================================


class TestStatus:
    async def test_checks_root_then_parses(
        self, repo: GitRepository, run: AsyncMock, tmp_path: Path
    ) -> None:
        run.side_effect = [
            _completed(f"{tmp_path}\n"),
            _completed("?? new.txt\0"),
        ]

        entries = await repo.get_status()

        assert [e.path for e in entries] == ["new.txt"]
        assert _argv(run) == [
            ["rev-parse", "--show-toplevel"],
            ["status", "-z", "-u"],
        ]

    async def test_subdirectory_is_not_repository_root(
        self, run: AsyncMock, tmp_path: Path
    ) -> None:
        nested = tmp_path / "nested"
        nested.mkdir()
        run.return_value = _completed(f"{tmp_path}\n")

        with pytest.raises(GitError) as exc_info:
            _ = await GitRepository(nested).get_status()

        assert exc_info.value.code == GitErrorCode.NOT_AT_REPOSITORY_ROOT


class TestHead:
    async def test_named_branch(self, repo: GitRepository, run: AsyncMock) -> None:
        run.return_value = _completed("main\n")
        assert await repo.get_head() == Ref(name="main", type=RefType.HEAD)

    async def test_detached(self, repo: GitRepository, run: AsyncMock) -> None:
        run.side_effect = [
            _completed(stderr="fatal: ref HEAD is not a symbolic ref", returncode=128),
            _completed("0123abcd\n"),
        ]

        head = await repo.get_head()

        assert head == Ref(name=None, commit="0123abcd", type=RefType.HEAD)

    async def test_branch_with_upstream(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("abc123\n"),
            _completed("origin/main\n"),
            _completed("2\t5\n"),
        ]

        branch = await repo.get_branch("main")

        assert branch == Ref(
            name="main",
            commit="abc123",
            type=RefType.HEAD,
            upstream="origin/main",
            ahead=2,
            behind=5,
        )
        assert _argv(run)[2] == [
            "rev-list",
            "--left-right",
            "--count",
            "main...origin/main",
        ]

    async def test_branch_without_upstream(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("abc123\n"),
            _completed(stderr="fatal: no upstream configured", returncode=128),
        ]

        branch = await repo.get_branch("topic")

        assert branch.upstream is None
        assert branch.ahead is None

    async def test_log_format(self, repo: GitRepository, run: AsyncMock) -> None:
        run.return_value = _completed("Subject\n\nBody\n")

        message = await repo.get_log(prev_count=1, format="%B")

        assert message == "Subject\n\nBody\n"
        assert _argv(run) == [["log", "-1", "--format=%B"]]


# =============================================================================
# Mutations
# =============================================================================


class TestMutations:
    async def test_add_everything(self, repo: GitRepository, run: AsyncMock) -> None:
        run.return_value = _completed()
        await repo.add(None)
        assert _argv(run) == [["add", "-A", "--", "."]]

    async def test_commit_reads_message_from_stdin(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.return_value = _completed()

        await repo.commit("fix: thing", all_=True, amend=True)

        assert run.call_args.kwargs["input"] == b"fix: thing"
        assert _argv(run) == [
            [
                "commit",
                "--quiet",
                "--allow-empty-message",
                "--file",
                "-",
                "--all",
                "--amend",
            ]
        ]

    async def test_stage_without_head_uses_default_mode(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("deadbeef\n"),
            _completed(stderr="fatal: Not a valid object name HEAD", returncode=128),
            _completed(),
        ]

        await repo.stage("a.txt", "hello\n")

        assert run.call_args_list[0].kwargs["input"] == b"hello\n"
        assert _argv(run)[2] == [
            "update-index",
            "--add",
            "--cacheinfo",
            "100644",
            "deadbeef",
            "a.txt",
        ]

    async def test_stage_keeps_existing_mode(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("deadbeef\n"),
            _completed("100755 blob 0123\tscript.sh\n"),
            _completed(),
        ]

        await repo.stage("script.sh", "#!/bin/sh\n")

        assert "100755" in _argv(run)[2]

    async def test_undo_root_commit_deletes_head(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed(
                stderr="fatal: ambiguous argument 'HEAD~': unknown revision",
                returncode=128,
            ),
            _completed(),
        ]

        await repo.undo()

        assert _argv(run)[1] == ["update-ref", "-d", "HEAD"]

    async def test_revert_files_without_commits_unstages(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [_completed(""), _completed()]

        await repo.revert_files("HEAD", ["a.txt"])

        assert _argv(run)[1] == ["rm", "--cached", "-r", "--", "a.txt"]

    async def test_revert_files_ignores_unknown_paths(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("* main\n"),
            _completed(
                stderr="error: pathspec 'x' did not match any file(s) known to git",
                returncode=1,
            ),
        ]

        await repo.revert_files("HEAD", ["x"])

        assert _argv(run)[1] == ["reset", "-q", "HEAD", "--", "x"]

    async def test_push_arguments(self, repo: GitRepository, run: AsyncMock) -> None:
        run.return_value = _completed()

        await repo.push("origin", "main", PushOptions(set_upstream=True))

        assert _argv(run) == [["push", "-u", "origin", "main"]]

    async def test_sync_without_upstream_is_noop(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("main\n"),
            _completed("abc\n"),
            _completed(stderr="fatal: no upstream", returncode=128),
        ]

        await repo.sync()

        assert all(args[0] not in {"pull", "push"} for args in _argv(run))

    async def test_sync_pulls_then_pushes(
        self, repo: GitRepository, run: AsyncMock
    ) -> None:
        run.side_effect = [
            _completed("main\n"),
            _completed("abc\n"),
            _completed("origin/trunk\n"),
            _completed("0\t0\n"),
            _completed(),
            _completed(),
        ]

        await repo.sync()

        assert _argv(run)[-2:] == [["pull"], ["push", "origin", "main:trunk"]]
