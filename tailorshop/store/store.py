"""Process-wide holder for the application state."""
import logging
import threading
from contextlib import contextmanager
from functools import wraps
from typing import Callable, List

from tailorshop.models import AppState
from tailorshop.store.reducer import transition

logger = logging.getLogger(__name__)

Observer = Callable[[AppState, AppState, object], None]


class Store:
    """
    Holds the current ``AppState`` and applies actions one at a time.

    Observers are called after every dispatch with
    ``(previous_state, new_state, action)``. A failing observer is logged
    and does not undo the dispatch.
    """

    def __init__(self, initial_state: AppState, reducer=transition):
        self._state = initial_state
        self._reducer = reducer
        self._observers: List[Observer] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer. Returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @contextmanager
    def transaction(self):
        """
        Hold the store lock across a read of ``state`` and the dispatches
        built from it. Nested use on the same thread is allowed.
        """
        with self._lock:
            yield self

    def dispatch(self, action) -> AppState:
        """Apply ``action`` and notify observers. Returns the new state."""
        with self._lock:
            previous = self._state
            self._state = self._reducer(previous, action)
            logger.debug(f"[STORE] {getattr(action, 'type', type(action).__name__)} dispatched")
            for observer in list(self._observers):
                try:
                    observer(previous, self._state, action)
                except Exception as e:
                    logger.warning(f"[STORE] Observer {observer!r} failed: {e}")
            return self._state


def serialized(f):
    """
    Decorator: run a service operation under ``store.transaction()``.

    The wrapped function takes the store as its first argument. Operations
    that read an order or employee and dispatch a modified copy use it so a
    concurrent request cannot overwrite their change.
    """
    @wraps(f)
    def decorated_function(store, *args, **kwargs):
        with store.transaction():
            return f(store, *args, **kwargs)
    return decorated_function
