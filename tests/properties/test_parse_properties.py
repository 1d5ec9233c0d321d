"""Property-based tests for git output parsers."""

from hypothesis import given, strategies as st

from gitstate.repository import FileStatus, parse_remotes, parse_status

# =============================================================================
# Strategies
# =============================================================================

status_letter = st.sampled_from(" MADRCU?!T")

# Paths as git prints them: non-empty, no NUL
path_text = st.text(
    alphabet=st.characters(blacklist_characters="\0", blacklist_categories=["Cs"]),
    min_size=1,
    max_size=40,
)


@st.composite
def status_entries(draw: st.DrawFn) -> FileStatus:
    x = draw(status_letter)
    y = draw(status_letter)
    rename = draw(path_text) if {x, y} & {"R", "C"} else None
    return FileStatus(x=x, y=y, path=draw(path_text), rename=rename)


def _porcelain(entries: list[FileStatus]) -> str:
    parts: list[str] = []
    for entry in entries:
        parts.append(f"{entry.x}{entry.y} {entry.path}")
        if entry.rename is not None:
            parts.append(entry.rename)
    return "".join(f"{part}\0" for part in parts)


# =============================================================================
# Status Properties
# =============================================================================


@given(entries=st.lists(status_entries(), max_size=10))
def test_status_records_are_recovered(entries: list[FileStatus]) -> None:
    """Property: every -z record is parsed back into the entry it describes."""
    assert parse_status(_porcelain(entries)) == entries


@given(
    y=st.sampled_from("RC"),
    path=path_text,
    original=path_text,
    rest=st.lists(status_entries(), max_size=5),
)
def test_worktree_rename_consumes_original_path(
    y: str, path: str, original: str, rest: list[FileStatus]
) -> None:
    """Property: a rename only in the working tree never yields a phantom entry."""
    head = FileStatus(x=" ", y=y, path=path, rename=original)

    parsed = parse_status(_porcelain([head, *rest]))

    assert parsed[0] == head
    assert len(parsed) == 1 + len(rest)


@given(output=st.text(max_size=200))
def test_status_parser_never_raises(output: str) -> None:
    """Property: arbitrary output yields entries with non-empty paths."""
    for entry in parse_status(output):
        assert entry.path


# =============================================================================
# Remote Properties
# =============================================================================

remote_name = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_", min_size=1, max_size=12)


@given(names=st.lists(remote_name, max_size=8))
def test_remotes_are_unique_by_name(names: list[str]) -> None:
    """Property: each remote appears once, in first-seen order."""
    output = "".join(
        f"{name}\thttps://example.com/{name}.git ({kind})\n"
        for name in names
        for kind in ("fetch", "push")
    )

    parsed = [remote.name for remote in parse_remotes(output)]

    assert parsed == list(dict.fromkeys(names))
