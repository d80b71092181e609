"""Observer: per-subscription gate between a producer and its consumer.

An Observer forwards emissions to the consumer's Handlers until the first
terminal event (error, complete, or unsubscribe). After that it is an inert
sink: every further call is a no-op with respect to the handlers.

Teardown runs at most once. It is tracked separately from the terminated
flag, so a late unsubscribe after complete/error never re-runs it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")

Teardown = Callable[[], None]

_HANDLER_KEYS = ("next", "error", "complete")


class Handlers(Generic[T]):
    """The consumer's handler set. Every callback is optional."""

    __slots__ = ("next", "error", "complete")

    def __init__(
        self,
        next: Callable[[T], Any] | None = None,
        error: Callable[[BaseException], Any] | None = None,
        complete: Callable[[], Any] | None = None,
    ) -> None:
        for name, fn in (("next", next), ("error", error), ("complete", complete)):
            if fn is not None and not callable(fn):
                raise TypeError(f"{name} handler must be callable, got {fn!r}")
        object.__setattr__(self, "next", next)
        object.__setattr__(self, "error", error)
        object.__setattr__(self, "complete", complete)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Handlers are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Handlers are immutable")

    @classmethod
    def coerce(cls, handlers: HandlersLike[T]) -> Handlers[T]:
        """Normalise whatever subscribe() was given into a Handlers.

        Accepts a Handlers, a mapping with next/error/complete keys,
        a bare callable (used as next), or None.
        """
        if handlers is None:
            return cls()
        if isinstance(handlers, Handlers):
            return handlers
        if isinstance(handlers, Mapping):
            unknown = set(handlers) - set(_HANDLER_KEYS)
            if unknown:
                raise TypeError(f"unknown handler keys: {sorted(unknown)}")
            return cls(**handlers)
        if callable(handlers):
            return cls(next=handlers)
        raise TypeError(f"cannot build handlers from {handlers!r}")

    def __repr__(self) -> str:
        present = [name for name in _HANDLER_KEYS if getattr(self, name) is not None]
        return f"Handlers({', '.join(present)})"


HandlersLike = Union[Handlers[T], Mapping[str, Callable[..., Any]], Callable[[T], Any], None]


class Observer(Generic[T]):
    """Gatekeeper for one subscription."""

    __slots__ = ("_handlers", "_terminated", "_teardown", "_torn_down")

    def __init__(self, handlers: Handlers[T]) -> None:
        self._handlers = handlers
        self._terminated = False
        self._teardown: Teardown | None = None
        self._torn_down = False

    @property
    def closed(self) -> bool:
        return self._terminated

    def next(self, value: T) -> None:
        """Deliver a value. Does not terminate."""
        if self._terminated:
            return
        fn = self._handlers.next
        if fn is not None:
            fn(value)

    def error(self, err: BaseException) -> None:
        """Deliver the terminal error once, then tear down."""
        if self._terminated:
            return
        self._terminated = True
        fn = self._handlers.error
        try:
            if fn is not None:
                fn(err)
        finally:
            self._run_teardown()

    def complete(self) -> None:
        """Deliver the completion signal once, then tear down."""
        if self._terminated:
            return
        self._terminated = True
        fn = self._handlers.complete
        try:
            if fn is not None:
                fn()
        finally:
            self._run_teardown()

    def unsubscribe(self) -> None:
        """Terminate and run teardown. Repeated calls are no-ops."""
        self._terminated = True
        self._run_teardown()

    def attach_teardown(self, teardown: Teardown | None) -> None:
        """Attach the producer's teardown.

        A synchronous producer may already have terminated the observer
        before returning its teardown; in that case it runs right away.
        """
        if teardown is not None and not callable(teardown):
            raise TypeError(f"producer must return a callable teardown or None, got {teardown!r}")
        self._teardown = teardown
        if self._terminated:
            self._run_teardown()

    def _run_teardown(self) -> None:
        teardown = self._teardown
        if teardown is None or self._torn_down:
            return
        self._torn_down = True
        self._teardown = None
        teardown()

    def __repr__(self) -> str:
        state = "closed" if self._terminated else "active"
        return f"Observer({state})"
