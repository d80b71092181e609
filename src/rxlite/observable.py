"""Observable: a reusable binding of a producer function.

Each subscribe() call creates a fresh Observer and runs the producer
synchronously against it. The producer may return a teardown, which is
attached once the producer returns and runs when the subscription ends.

Faults raised by the producer are not converted into an error emission;
they propagate out of subscribe() unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Optional, TypeVar

from rxlite.observer import Handlers, HandlersLike, Observer, Teardown

logger = logging.getLogger("rxlite.observable")

T = TypeVar("T")

Producer = Callable[[Observer[T]], Optional[Teardown]]


class Subscription:
    """Handle returned by Observable.subscribe(). Only cancels."""

    __slots__ = ("_observer",)

    def __init__(self, observer: Observer) -> None:
        self._observer = observer

    @property
    def closed(self) -> bool:
        return self._observer.closed

    def unsubscribe(self) -> None:
        """Stop future deliveries. Safe to call more than once."""
        self._observer.unsubscribe()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "active"
        return f"Subscription({state})"


class Observable(Generic[T]):
    """Cold, single-subscriber push stream."""

    __slots__ = ("_producer",)

    def __init__(self, producer: Producer[T]) -> None:
        if not callable(producer):
            raise TypeError(f"producer must be callable, got {producer!r}")
        self._producer = producer

    def subscribe(self, handlers: HandlersLike[T] = None) -> Subscription:
        """Run the producer against a new Observer wrapping handlers.

        The producer runs to completion before this returns.

        Usage:
            received = []
            sub = Observable.from_([1, 2]).subscribe({
                "next": received.append,
                "complete": lambda: received.append("done"),
            })
            # received == [1, 2, "done"]
            sub.unsubscribe()  # no-op, already complete
        """
        observer: Observer[T] = Observer(Handlers.coerce(handlers))
        teardown = self._producer(observer)
        observer.attach_teardown(teardown)
        return Subscription(observer)

    @classmethod
    def from_(cls, values: Iterable[T]) -> Observable[T]:
        """Same as from_iterable(), but builds an instance of cls."""
        return cls(emit_all(values))

    def __repr__(self) -> str:
        name = getattr(self._producer, "__name__", type(self._producer).__name__)
        return f"Observable({name})"


def emit_all(values: Iterable[T]) -> Producer[T]:
    """Producer that emits each value in order, then completes.

    The values are captured once, so every subscription replays the same
    sequence even if a generator was passed. Emission stops early once the
    observer is closed.
    """
    items = tuple(values)

    def _produce(observer: Observer[T]) -> Teardown:
        for value in items:
            if observer.closed:
                break
            observer.next(value)
        observer.complete()

        def _teardown() -> None:
            logger.debug("unsubscribed")

        return _teardown

    return _produce


def from_iterable(values: Iterable[T]) -> Observable[T]:
    """Observable that emits each value in order, then completes."""
    return Observable(emit_all(values))
