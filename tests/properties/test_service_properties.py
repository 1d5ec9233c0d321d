"""Property-based tests for the service's outcome policies."""

from hypothesis import given, strategies as st

from gitstate.enums import GitErrorCode
from gitstate.events import Emitter, Subscription
from gitstate.exceptions import GitError
from gitstate.service import (
    Empty,
    ErrorContext,
    Fatal,
    OutputRelay,
    Suppressed,
    classify,
    normalize_treeish,
)

# =============================================================================
# Strategies
# =============================================================================

error_codes = st.one_of(st.none(), st.sampled_from(list(GitErrorCode)))

git_errors = st.builds(lambda code: GitError("git failed", code=code), error_codes)

other_errors = st.sampled_from(
    [OSError("io"), ValueError("bad"), PermissionError("denied")]
)


# =============================================================================
# Classification Properties
# =============================================================================


@given(error=st.one_of(git_errors, other_errors), context=st.sampled_from(ErrorContext))
def test_classification_keeps_cause(error: Exception, context: ErrorContext) -> None:
    """Property: the classified outcome always carries the original object."""
    assert classify(error, context=context).cause is error


@given(error=git_errors)
def test_status_is_fatal_only_for_configuration_and_root(error: GitError) -> None:
    outcome = classify(error, context=ErrorContext.STATUS)

    fatal_codes = {GitErrorCode.BAD_CONFIG_FILE, GitErrorCode.NOT_AT_REPOSITORY_ROOT}
    if error.code in fatal_codes:
        assert isinstance(outcome, Fatal)
    else:
        assert isinstance(outcome, Empty)


@given(error=git_errors)
def test_content_suppresses_every_git_error(error: GitError) -> None:
    assert isinstance(classify(error, context=ErrorContext.CONTENT), Suppressed)


@given(error=other_errors)
def test_content_never_suppresses_other_errors(error: Exception) -> None:
    assert isinstance(classify(error, context=ErrorContext.CONTENT), Fatal)


# =============================================================================
# Treeish Properties
# =============================================================================


@given(treeish=st.text(min_size=1).filter(lambda s: s != "~"))
def test_revisions_pass_through(treeish: str) -> None:
    assert normalize_treeish(treeish) == treeish


# =============================================================================
# Relay Properties
# =============================================================================

# True opens a subscription; False closes the oldest open one (if any)
relay_ops = st.lists(st.booleans(), max_size=30)


@given(ops=relay_ops)
def test_relay_attached_iff_subscribers(ops: list[bool]) -> None:
    """Property: one upstream attachment exactly while subscribers exist."""
    upstream: Emitter[str] = Emitter()
    relay = OutputRelay(upstream.subscribe)
    open_subscriptions: list[Subscription] = []

    for subscribe in ops:
        if subscribe:
            open_subscriptions.append(relay.subscribe(lambda _chunk: None))
        elif open_subscriptions:
            open_subscriptions.pop(0).close()

        assert relay.subscriber_count == len(open_subscriptions)
        assert relay.attached == bool(open_subscriptions)
        assert upstream.listener_count == (1 if open_subscriptions else 0)


@given(chunks=st.lists(st.text(max_size=5), max_size=10), listeners=st.integers(1, 4))
def test_relay_delivers_in_order_to_every_subscriber(
    chunks: list[str], listeners: int
) -> None:
    upstream: Emitter[str] = Emitter()
    relay = OutputRelay(upstream.subscribe)
    received: list[list[str]] = [[] for _ in range(listeners)]
    for seen in received:
        _ = relay.subscribe(seen.append)

    for chunk in chunks:
        upstream.fire(chunk)

    assert all(seen == chunks for seen in received)
