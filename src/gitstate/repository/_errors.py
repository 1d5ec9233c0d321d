"""Translation of git stderr text into well-known error codes."""

import re
from typing import Final

from gitstate.enums import GitErrorCode

# Checked in order; the first matching pattern wins.
_STDERR_PATTERNS: Final[tuple[tuple[re.Pattern[str], GitErrorCode], ...]] = (
    (re.compile(r"Authentication failed"), GitErrorCode.AUTHENTICATION_FAILED),
    (
        re.compile(r"Not a git repository", re.IGNORECASE),
        GitErrorCode.NOT_A_GIT_REPOSITORY,
    ),
    (re.compile(r"bad config(uration)? (file|line)"), GitErrorCode.BAD_CONFIG_FILE),
    (
        re.compile(
            r"cannot make pipe for command substitution"
            r"|cannot create standard input pipe"
        ),
        GitErrorCode.CANT_CREATE_PIPE,
    ),
    (re.compile(r"Repository not found"), GitErrorCode.REPOSITORY_NOT_FOUND),
    (re.compile(r"unable to access"), GitErrorCode.CANT_ACCESS_REMOTE),
    (
        re.compile(r"No remote repository specified|No configured push destination"),
        GitErrorCode.NO_REMOTE_REPOSITORY_SPECIFIED,
    ),
    (
        re.compile(r"Could not read from remote repository"),
        GitErrorCode.REMOTE_CONNECTION_ERROR,
    ),
    (re.compile(r"Please tell me who you are"), GitErrorCode.NO_USER_NAME_CONFIGURED),
    (
        re.compile(
            r"Please,? commit your changes or stash them|would be overwritten by"
        ),
        GitErrorCode.DIRTY_WORK_TREE,
    ),
    (
        re.compile(r"you have unmerged files|not possible because you have unmerged"),
        GitErrorCode.UNMERGED_CHANGES,
    ),
    (re.compile(r"^CONFLICT ", re.MULTILINE), GitErrorCode.CONFLICT),
    (re.compile(r"\[rejected\]|failed to push some refs"), GitErrorCode.PUSH_REJECTED),
)


def error_code_from_output(stderr: str, stdout: str = "") -> GitErrorCode | None:
    """Infer a well-known error code from git's output.

    Merge conflicts are reported on stdout by some commands, so both streams
    are searched with stderr taking precedence.

    Args:
        stderr: Captured standard error.
        stdout: Captured standard output.

    Returns:
        The matching GitErrorCode, or None when the failure is unrecognized.
    """
    for text in (stderr, stdout):
        if not text:
            continue
        for pattern, code in _STDERR_PATTERNS:
            if pattern.search(text):
                return code
    return None
