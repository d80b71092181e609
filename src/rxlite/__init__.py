"""rxlite: minimal push-based observable streams for Python."""

from importlib.metadata import version as _version

__version__ = _version("rxlite")

from rxlite.observer import Handlers, Observer
from rxlite.observable import Observable, Subscription, emit_all, from_iterable
# textual NOT auto-imported, opt-in only

__all__ = [
    "Handlers",
    "Observer",
    "Observable",
    "Subscription",
    "emit_all",
    "from_iterable",
]
