"""Unit tests for git output error-code inference."""

import pytest

from gitstate.enums import GitErrorCode
from gitstate.repository import error_code_from_output


class TestErrorCodeFromOutput:
    @pytest.mark.parametrize(
        ("stderr", "expected"),
        [
            (
                "fatal: Authentication failed for 'https://x'",
                GitErrorCode.AUTHENTICATION_FAILED,
            ),
            (
                "fatal: not a git repository (or any of the parent directories)",
                GitErrorCode.NOT_A_GIT_REPOSITORY,
            ),
            (
                "fatal: bad config line 3 in file .git/config",
                GitErrorCode.BAD_CONFIG_FILE,
            ),
            ("remote: Repository not found.", GitErrorCode.REPOSITORY_NOT_FOUND),
            (
                "fatal: unable to access 'https://x/': Could not resolve host",
                GitErrorCode.CANT_ACCESS_REMOTE,
            ),
            (
                "fatal: No remote repository specified.",
                GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED,
            ),
            (
                "fatal: No configured push destination.",
                GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED,
            ),
            (
                "fatal: Could not read from remote repository.",
                GitErrorCode.REMOTE_CONNECTION_ERROR,
            ),
            ("*** Please tell me who you are.", GitErrorCode.NO_USER_NAME_CONFIGURED),
            (
                "error: Your local changes would be overwritten by checkout",
                GitErrorCode.DIRTY_WORK_TREE,
            ),
            (
                "error: Pulling is not possible because you have unmerged files.",
                GitErrorCode.UNMERGED_CHANGES,
            ),
            (
                " ! [rejected]        main -> main (fetch first)",
                GitErrorCode.PUSH_REJECTED,
            ),
        ],
    )
    def test_recognized_stderr(self, stderr: str, expected: GitErrorCode) -> None:
        assert error_code_from_output(stderr) == expected

    def test_conflict_reported_on_stdout(self) -> None:
        stdout = "Auto-merging a.txt\nCONFLICT (content): Merge conflict in a.txt\n"
        assert error_code_from_output("", stdout) == GitErrorCode.CONFLICT

    def test_stderr_takes_precedence(self) -> None:
        code = error_code_from_output(
            "fatal: Authentication failed", "CONFLICT (content): x"
        )
        assert code == GitErrorCode.AUTHENTICATION_FAILED

    def test_unrecognized_output(self) -> None:
        assert error_code_from_output("fatal: something odd", "") is None
        assert error_code_from_output("", "") is None
