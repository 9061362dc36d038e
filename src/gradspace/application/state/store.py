"""Observable state container shared by every client-side store."""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[S], None]
Updater = Callable[[S], S]


class Store(Generic[S]):
    """Holds one immutable state value and notifies subscribers on change.

    State values are frozen dataclasses; every mutation replaces the value
    as a whole, so a reader never observes a half-applied update.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    @property
    def state(self) -> S:
        return self._state

    def get(self) -> S:
        return self._state

    def set(self, value: S | Updater[S]) -> None:
        new_state = value(self._state) if callable(value) else value
        if new_state == self._state:
            return
        self._state = new_state
        self._notify()

    def patch(self, **changes: Any) -> None:
        self.set(dataclasses.replace(self._state, **changes))  # type: ignore[type-var]

    def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Store listener failed")
