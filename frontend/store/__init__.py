"""
store/__init__.py — Client state container.

The Store is created explicitly and handed to whatever renders views; there
is no module-level instance.

State shape:
    {
        "session": {"user": {...} | None},
        "cafes":   {cafe_id: cafe},
        "reviews": {review_id: review},
    }

dispatch() accepts either a plain action dict {"type", "payload"} or a
thunk — a callable taking (dispatch, get_state, fetch) — whose return value
is passed back to the caller. ApiError raised inside a thunk propagates.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from frontend.csrf import CsrfFetch
from frontend.store.cafes import cafes_reducer
from frontend.store.reviews import reviews_reducer
from frontend.store.session import session_reducer

logger = logging.getLogger(__name__)

REDUCERS: dict[str, Callable[[Any, dict], Any]] = {
    "session": session_reducer,
    "cafes": cafes_reducer,
    "reviews": reviews_reducer,
}


def root_reducer(state: dict | None, action: dict) -> dict:
    state = state or {}
    return {name: reducer(state.get(name), action) for name, reducer in REDUCERS.items()}


class Store:

    def __init__(self, fetch: CsrfFetch, preloaded_state: dict | None = None) -> None:
        self.fetch = fetch
        self._state = root_reducer(preloaded_state, {"type": "@@INIT"})
        self._listeners: list[Callable[[dict], None]] = []

    def get_state(self) -> dict:
        return self._state

    def dispatch(self, action):
        if callable(action):
            return action(self.dispatch, self.get_state, self.fetch)

        logger.debug("dispatch %s", action["type"])
        self._state = root_reducer(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return action

    def subscribe(self, listener: Callable[[dict], None]) -> Callable[[], None]:
        """Registers `listener`; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def configure_store(fetch: CsrfFetch, preloaded_state: dict | None = None) -> Store:
    return Store(fetch, preloaded_state)
