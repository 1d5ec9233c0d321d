"""Rich rendering of repository snapshots."""

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from gitstate.config import Config
    from gitstate.repository import Ref
    from gitstate.service import CommitInfo, RepositorySnapshot


def describe_head(head: "Ref | None") -> str:  # noqa: UP037
    """Return a one-line description of HEAD with tracking information.

    Example:
        >>> describe_head(Ref("main", upstream="origin/main", ahead=1, behind=0))
        'main -> origin/main [ahead 1]'
    """
    if head is None:
        return "(unknown)"
    if head.name is None:
        return f"(detached at {(head.commit or '')[:8]})"

    text = head.name
    if head.upstream:
        text += f" -> {head.upstream}"
        counts = [
            f"{label} {count}"
            for label, count in (("ahead", head.ahead), ("behind", head.behind))
            if count
        ]
        if counts:
            text += f" [{', '.join(counts)}]"
    return text


def render_snapshot(console: "Console", snapshot: "RepositorySnapshot") -> None:  # noqa: UP037
    """Print a snapshot: root, HEAD, status entries, ref and remote counts."""
    console.print(f"[bold]Repository:[/bold] {escape(str(snapshot.repository_root))}")
    console.print(f"[bold]HEAD:[/bold] {escape(describe_head(snapshot.head))}")

    if snapshot.status:
        table = Table("X", "Y", "Path", box=None, show_edge=False)
        for entry in snapshot.status:
            path = entry.path
            if entry.rename is not None:
                path = f"{entry.path} -> {entry.rename}"
            table.add_row(escape(entry.x), escape(entry.y), escape(path))
        console.print(table)
    else:
        console.print("[dim]Working tree clean[/dim]")

    console.print(
        f"[dim]{len(snapshot.refs)} ref(s), {len(snapshot.remotes)} remote(s)[/dim]"
    )


def render_commit_info(console: "Console", commit_info: "CommitInfo") -> None:  # noqa: UP037
    """Print the commit template and the previous commit message."""
    console.print("[bold]Template:[/bold]")
    console.print(escape(commit_info.template) or "[dim](none)[/dim]")
    console.print("[bold]Previous message:[/bold]")
    console.print(escape(commit_info.prev_commit_msg.rstrip()) or "[dim](none)[/dim]")


def render_config(console: "Console", config: "Config") -> None:  # noqa: UP037
    """Print the contributing sources, then the merged configuration as JSON."""
    for source in config.sources:
        if not source.exists or not source.values:
            continue
        location = f" {escape(str(source.path))}" if source.path else ""
        console.print(f"[dim]# {source.name.value}{location}[/dim]")
    console.print_json(data=config.to_dict())
