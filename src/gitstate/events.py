"""Synchronous listener primitives.

This module provides a minimal event emitter used by repository
collaborators to publish raw command output, and the Subscription handle
returned to listeners so they can detach again.
"""

from collections.abc import Callable
from typing import final

type Listener[T] = Callable[[T], None]


@final
class Subscription:
    """Handle for a registered listener.

    Closing a subscription is idempotent; the detach callback runs at most
    once.
    """

    __slots__ = ("_detach",)

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach: Callable[[], None] | None = detach

    @property
    def closed(self) -> bool:
        """Return True once the listener has been detached."""
        return self._detach is None

    def close(self) -> None:
        """Detach the listener."""
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()


@final
class Emitter[T]:
    """Fan out values to registered listeners in registration order.

    Example:
        >>> emitter: Emitter[str] = Emitter()
        >>> seen: list[str] = []
        >>> subscription = emitter.subscribe(seen.append)
        >>> emitter.fire("hello")
        >>> subscription.close()
        >>> emitter.fire("dropped")
        >>> seen
        ['hello']
    """

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: list[Listener[T]] = []

    @property
    def listener_count(self) -> int:
        """Return the number of attached listeners."""
        return len(self._listeners)

    def subscribe(self, listener: Listener[T]) -> Subscription:
        """Register a listener.

        Args:
            listener: Callable invoked with every fired value.

        Returns:
            Subscription that removes this registration when closed.
        """
        # Wrap so the same callable can be registered twice and removed once.
        entry: Listener[T] = lambda value: listener(value)  # noqa: E731
        self._listeners.append(entry)
        return Subscription(lambda: self._listeners.remove(entry))

    def fire(self, value: T) -> None:
        """Deliver a value to every listener attached at call time."""
        for listener in tuple(self._listeners):
            listener(value)
