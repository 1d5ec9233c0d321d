"""Parsers for git plumbing output.

All parsers are pure functions over decoded command output so they can be
tested without a git executable.
"""

from typing import Final

from gitstate.enums import RefType
from gitstate.repository._models import FileStatus, Ref, Remote

_HEADS_PREFIX: Final = "refs/heads/"
_REMOTES_PREFIX: Final = "refs/remotes/"
_TAGS_PREFIX: Final = "refs/tags/"

# Status letters whose entry is followed by the original path
_RENAME_LETTERS: Final = frozenset({"R", "C"})


def parse_status(output: str) -> list[FileStatus]:
    """Parse ``git status -z -u`` output.

    Each record is ``XY PATH`` terminated by NUL. Rename and copy records,
    whether staged (``R ``) or only in the working tree (`` R`` after
    ``git add -N``), are followed by one more NUL-terminated field holding
    the original path.

    Args:
        output: Raw stdout of the status command.

    Returns:
        Status entries in the order git reported them.
    """
    fields = output.split("\0")
    entries: list[FileStatus] = []
    index = 0

    while index < len(fields):
        record = fields[index]
        index += 1
        if len(record) < 4:  # noqa: PLR2004 - "XY " plus at least one path char
            continue

        x, y, path = record[0], record[1], record[3:]
        rename: str | None = None
        if (x in _RENAME_LETTERS or y in _RENAME_LETTERS) and index < len(fields):
            rename = fields[index]
            index += 1

        entries.append(FileStatus(x=x, y=y, path=path, rename=rename))

    return entries


def parse_refs(output: str) -> list[Ref]:
    """Parse ``git for-each-ref --format '%(refname) %(objectname)'`` output.

    Refs outside heads, remotes and tags are skipped, as is the symbolic
    ``refs/remotes/<remote>/HEAD`` pointer.

    Args:
        output: Raw stdout of the for-each-ref command.

    Returns:
        References in the order git reported them.
    """
    refs: list[Ref] = []

    for line in output.splitlines():
        refname, _, commit = line.strip().partition(" ")
        if not refname or not commit:
            continue

        if refname.startswith(_HEADS_PREFIX):
            refs.append(
                Ref(
                    name=refname[len(_HEADS_PREFIX) :],
                    commit=commit,
                    type=RefType.HEAD,
                )
            )
        elif refname.startswith(_REMOTES_PREFIX):
            name = refname[len(_REMOTES_PREFIX) :]
            remote, _, branch = name.partition("/")
            if branch == "HEAD":
                continue
            refs.append(
                Ref(name=name, commit=commit, type=RefType.REMOTE_HEAD, remote=remote)
            )
        elif refname.startswith(_TAGS_PREFIX):
            refs.append(
                Ref(name=refname[len(_TAGS_PREFIX) :], commit=commit, type=RefType.TAG)
            )

    return refs


def parse_remotes(output: str) -> list[Remote]:
    """Parse ``git remote --verbose`` output.

    Each remote appears twice (fetch and push); the first URL wins.

    Args:
        output: Raw stdout of the remote command.

    Returns:
        Remotes de-duplicated by name, in the order git reported them.
    """
    remotes: dict[str, Remote] = {}

    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:  # noqa: PLR2004
            continue
        name, url = parts[0], parts[1]
        if name not in remotes:
            remotes[name] = Remote(name=name, url=url)

    return list(remotes.values())


def parse_ahead_behind(output: str) -> tuple[int, int] | None:
    """Parse ``git rev-list --left-right --count A...B`` output.

    Args:
        output: Raw stdout, two tab-separated integers.

    Returns:
        Tuple of (ahead, behind), or None when the output is malformed.
    """
    parts = output.split()
    if len(parts) != 2:  # noqa: PLR2004
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None
