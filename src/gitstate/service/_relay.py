"""Demand-driven relay of collaborator output.

The relay holds a single upstream subscription to the collaborator's raw
output event, and only while at least one listener is attached. Output
produced while nobody listens is dropped.
"""

from collections.abc import Callable
from typing import final

from gitstate.events import Emitter, Listener, Subscription

type UpstreamSubscribe = Callable[[Listener[str]], Subscription]


@final
class OutputRelay:
    """Subscriber-count-gated forwarder of output chunks.

    The first subscriber attaches the relay to the upstream source; closing
    the last subscription detaches it again. All subscribers share the same
    upstream attachment and receive chunks in the order they were produced.

    Example:
        >>> relay = OutputRelay(repository.on_output)
        >>> subscription = relay.subscribe(print)
        >>> relay.attached
        True
        >>> subscription.close()
        >>> relay.attached
        False
    """

    __slots__ = ("_emitter", "_upstream", "_upstream_subscribe")

    def __init__(self, upstream_subscribe: UpstreamSubscribe) -> None:
        """Initialize the relay.

        Args:
            upstream_subscribe: Function attaching a listener to the upstream
                output source and returning its Subscription.
        """
        self._upstream_subscribe = upstream_subscribe
        self._emitter: Emitter[str] = Emitter()
        self._upstream: Subscription | None = None

    @property
    def subscriber_count(self) -> int:
        """Return the number of active subscribers."""
        return self._emitter.listener_count

    @property
    def attached(self) -> bool:
        """Return True while the relay holds an upstream subscription."""
        return self._upstream is not None

    def subscribe(self, listener: Listener[str]) -> Subscription:
        """Attach a listener, connecting upstream on the 0 -> 1 transition.

        Args:
            listener: Callable invoked with each output chunk.

        Returns:
            Subscription whose close() removes the listener and, if it was
            the last one, disconnects from the upstream source.

        Raises:
            Exception: Whatever the upstream source raises while attaching;
                the listener is not registered in that case.
        """
        if self._upstream is None:
            self._upstream = self._upstream_subscribe(self._emitter.fire)
        inner = self._emitter.subscribe(listener)

        def detach() -> None:
            inner.close()
            if self._emitter.listener_count == 0 and self._upstream is not None:
                upstream, self._upstream = self._upstream, None
                upstream.close()

        return Subscription(detach)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Close a subscription previously returned by subscribe()."""
        subscription.close()
