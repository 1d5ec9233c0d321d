"""Unit tests for collaborator failure classification."""

import pytest

from gitstate.enums import GitErrorCode
from gitstate.exceptions import GitError
from gitstate.service import Empty, ErrorContext, Fatal, Suppressed, classify


def _git_error(code: GitErrorCode | None = None) -> GitError:
    return GitError("Failed to execute git", code=code, exit_code=128)


class TestStatusContext:
    @pytest.mark.parametrize(
        "code", [GitErrorCode.BAD_CONFIG_FILE, GitErrorCode.NOT_AT_REPOSITORY_ROOT]
    )
    def test_fatal_codes(self, code: GitErrorCode) -> None:
        error = _git_error(code)

        result = classify(error, context=ErrorContext.STATUS)

        assert result == Fatal(error)
        assert result.cause is error

    @pytest.mark.parametrize(
        "code",
        [
            None,
            GitErrorCode.NOT_A_GIT_REPOSITORY,
            GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED,
        ],
    )
    def test_other_git_errors_are_empty(self, code: GitErrorCode | None) -> None:
        error = _git_error(code)
        assert classify(error, context=ErrorContext.STATUS) == Empty(error)

    def test_non_git_errors_are_empty(self) -> None:
        error = FileNotFoundError("/missing")
        assert classify(error, context=ErrorContext.STATUS) == Empty(error)


class TestFetchContext:
    def test_no_remote_is_suppressed(self) -> None:
        error = _git_error(GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED)
        assert classify(error, context=ErrorContext.FETCH) == Suppressed(error)

    @pytest.mark.parametrize(
        "code",
        [None, GitErrorCode.AUTHENTICATION_FAILED, GitErrorCode.BAD_CONFIG_FILE],
    )
    def test_other_errors_are_fatal(self, code: GitErrorCode | None) -> None:
        error = _git_error(code)
        assert classify(error, context=ErrorContext.FETCH) == Fatal(error)


class TestContentContext:
    def test_git_errors_are_suppressed(self) -> None:
        error = _git_error()
        assert classify(error, context=ErrorContext.CONTENT) == Suppressed(error)

    def test_other_errors_are_fatal(self) -> None:
        error = PermissionError("denied")
        assert classify(error, context=ErrorContext.CONTENT) == Fatal(error)
