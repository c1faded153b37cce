"""
Minimal observer interface between the simulation core and its host.
"""

from typing import Callable, List


class Emitter:
    """Calls every registered listener, in registration order, on emit."""

    def __init__(self):
        self._listeners: List[Callable] = []

    def add_listener(self, listener: Callable):
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable):
        self._listeners.remove(listener)

    def has_listener(self, listener: Callable) -> bool:
        return listener in self._listeners

    def emit(self, *args):
        # copy so listeners may unsubscribe themselves while being notified
        for listener in list(self._listeners):
            listener(*args)

    def dispose(self):
        self._listeners.clear()
