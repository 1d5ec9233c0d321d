"""Structured fan-out helpers built on anyio task groups."""

from collections.abc import Awaitable, Callable, Iterator
from typing import Any

import anyio

type ErrorPredicate = Callable[[BaseException], bool]


def _leaves(group: BaseExceptionGroup[BaseException]) -> Iterator[BaseException]:
    """Yield the non-group exceptions of a (nested) group, depth first."""
    for exc in group.exceptions:  # pyright: ignore[reportUnknownMemberType]
        if isinstance(exc, BaseExceptionGroup):
            yield from _leaves(exc)  # pyright: ignore[reportUnknownArgumentType]
        else:
            yield exc


def _pick_leaf(
    group: BaseExceptionGroup[BaseException],
    prefer: ErrorPredicate | None = None,
) -> BaseException:
    """Return the exception to re-raise for a failed join.

    The first leaf matching ``prefer`` wins; otherwise the first leaf in
    group order.
    """
    leaves = list(_leaves(group))
    if prefer is not None:
        for leaf in leaves:
            if prefer(leaf):
                return leaf
    return leaves[0]


async def gather(
    *calls: Callable[[], Awaitable[Any]],  # pyright: ignore[reportExplicitAny]
    prefer: ErrorPredicate | None = None,
) -> list[Any]:  # pyright: ignore[reportExplicitAny]
    """Run async callables concurrently and collect their results in order.

    Join-all semantics: when any call raises, the remaining calls are
    cancelled and the original exception is re-raised unwrapped, so callers
    can inspect the failing collaborator's own error object.

    Several calls can fail before cancellation reaches them. The re-raised
    exception is then the first one matching ``prefer``, falling back to the
    first one collected, so a caller that escalates some errors does not
    lose them to a sibling's harmless failure.

    Args:
        *calls: Zero-argument async callables.
        prefer: Optional predicate selecting which of several errors wins.

    Returns:
        Results in the same order as ``calls``.

    Example:
        >>> status, head = await gather(repo.get_status, repo.get_head)
    """
    results: list[Any] = [None] * len(calls)  # pyright: ignore[reportExplicitAny]

    async def _run(index: int, call: Callable[[], Awaitable[Any]]) -> None:  # pyright: ignore[reportExplicitAny]
        results[index] = await call()

    try:
        async with anyio.create_task_group() as tg:
            for index, call in enumerate(calls):
                tg.start_soon(_run, index, call)
    except BaseExceptionGroup as group:
        raise _pick_leaf(group, prefer) from group

    return results
