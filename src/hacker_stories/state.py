from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List

from .actions import Action, FetchFailure, FetchInit, FetchSuccess, RemoveStory
from .datamodels import StoriesState
from .exceptions import UnknownActionError

logger = logging.getLogger("hacker_stories")

Listener = Callable[[StoriesState], None]


def stories_reducer(state: StoriesState, action: Action) -> StoriesState:
    """Return the state that follows ``state`` once ``action`` is applied."""
    if isinstance(action, FetchInit):
        return replace(state, is_loading=True, is_error=False)
    if isinstance(action, FetchSuccess):
        return replace(
            state, data=tuple(action.payload), is_loading=False, is_error=False
        )
    if isinstance(action, FetchFailure):
        return replace(state, is_loading=False, is_error=True)
    if isinstance(action, RemoveStory):
        object_id = action.payload.objectID
        return replace(
            state, data=tuple(s for s in state.data if s.objectID != object_id)
        )
    raise UnknownActionError(f"Unhandled stories action: {action!r}")


class StoriesStore:
    """Holds the current StoriesState; all writes go through dispatch."""

    def __init__(self, initial: StoriesState | None = None):
        self._state = initial or StoriesState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> StoriesState:
        return self._state

    def dispatch(self, action: Action) -> StoriesState:
        self._state = stories_reducer(self._state, action)
        logger.debug(
            "%s -> %d stories, loading=%s, error=%s",
            getattr(action, "type", type(action).__name__),
            len(self._state.data),
            self._state.is_loading,
            self._state.is_error,
        )
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
