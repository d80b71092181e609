"""Textual integration for rxlite. Opt-in, requires textual.

Delivers a subscription's emissions to widgets of a running Textual app.
Guard, NoMatches handling and thread marshalling live here, not at callsites;
the core modules never import textual.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable

from textual.css.query import NoMatches

from rxlite.observable import Observable, Subscription
from rxlite.observer import Handlers, HandlersLike

# Pause depth per app, keyed by id(app). An entry exists only while depth > 0.
_pause_depth: dict[int, int] = {}


@contextmanager
def pause(app):
    """Drop guarded emissions for app while widgets are being replaced.

    Nested pauses of the same app hold until the outermost one exits.
    """
    key = id(app)
    _pause_depth[key] = _pause_depth.get(key, 0) + 1
    try:
        yield
    finally:
        depth = _pause_depth.pop(key) - 1
        if depth:
            _pause_depth[key] = depth


def is_safe(app) -> bool:
    """Can emissions reach app's widgets right now?"""
    return bool(app.is_running) and id(app) not in _pause_depth


def subscribe(app, observable: Observable, handlers: HandlersLike = None) -> Subscription:
    """observable.subscribe() that safely bridges to Textual widgets.

    Each delivery is skipped while the app is paused or not running,
    marshalled via call_from_thread when it arrives from another thread,
    and NoMatches raised by widget queries is swallowed. error/complete
    still terminate the subscription when their delivery is skipped.
    """
    _main = threading.get_ident()
    base = Handlers.coerce(handlers)

    def _guard(fn: Callable | None) -> Callable | None:
        if fn is None:
            return None

        def _safe(*args):
            try:
                fn(*args)
            except NoMatches:
                pass

        def _guarded(*args):
            if not is_safe(app):
                return
            if threading.get_ident() != _main:
                app.call_from_thread(_safe, *args)
            else:
                _safe(*args)

        return _guarded

    return observable.subscribe(
        Handlers(
            next=_guard(base.next),
            error=_guard(base.error),
            complete=_guard(base.complete),
        )
    )
