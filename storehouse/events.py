"""
Registry Events - Synchronous, ordered event channel
Listeners run in registration order on the emitting thread.
"""

import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple


class RegistryEvent(str, Enum):
    """Signals emitted by the registry, with their payload keys"""
    MANAGER_BEFORE_ADD = "manager:before:add"              # name, manager
    MANAGER_ADDED = "manager:added"                        # name, manager
    MANAGER_REMOVED = "manager:removed"                    # name, manager
    DEFAULT_CHANGED = "manager:default:changed"            # previous, current
    CONNECTION_BEFORE_CLOSE = "connection:before:close"    # manager
    CONNECTION_CLOSED = "connection:closed"                # manager
    CONNECTION_ERROR_CLOSE = "connection:error:close"      # manager, error
    CONNECTION_ACCESSED = "connection:accessed"            # manager, found
    BEFORE_CLOSE_ALL = "connections:before:close:all"      # no payload
    CLOSED_ALL = "connections:closed:all"                  # count, failed
    MODEL_ACCESSED = "model:accessed"                      # manager, model, found
    BEFORE_DESTROY = "registry:before:destroy"             # no payload
    DESTROYED = "registry:destroyed"                       # count


Listener = Callable[..., Any]


class EventEmitter:
    """
    Minimal event emitter.

    Event names are plain strings; RegistryEvent members compare and hash
    equal to their values, so both forms address the same listeners.
    A listener that raises propagates out of emit() and stops the
    remaining listeners for that emission.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Tuple[Listener, bool]]] = {}
        self._listeners_lock = threading.RLock()

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        """Register listener for every emission of event"""
        return self._add_listener(event, listener, once=False)

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        """Register listener for the next emission of event only"""
        return self._add_listener(event, listener, once=True)

    def off(self, event: str, listener: Listener) -> "EventEmitter":
        """
        Remove the most recently added registration of listener.

        Matching uses ==, so a fresh bound method of the same object matches.
        """
        with self._listeners_lock:
            entries = self._listeners.get(event, [])
            for index in range(len(entries) - 1, -1, -1):
                if entries[index][0] == listener:
                    del entries[index]
                    break
            if not entries:
                self._listeners.pop(event, None)
        return self

    def emit(self, event: str, *args: Any) -> bool:
        """
        Call every listener registered for event with args.

        Returns:
            True if at least one listener was called
        """
        with self._listeners_lock:
            entries = list(self._listeners.get(event, []))
            for entry in entries:
                if entry[1]:
                    self._discard(event, entry)

        for listener, _ in entries:
            listener(*args)
        return bool(entries)

    def listeners(self, event: str) -> List[Listener]:
        with self._listeners_lock:
            return [listener for listener, _ in self._listeners.get(event, [])]

    def listener_count(self, event: str) -> int:
        with self._listeners_lock:
            return len(self._listeners.get(event, []))

    def remove_all_listeners(self, event: Optional[str] = None) -> "EventEmitter":
        with self._listeners_lock:
            if event is None:
                self._listeners.clear()
            else:
                self._listeners.pop(event, None)
        return self

    def _add_listener(self, event: str, listener: Listener, once: bool) -> "EventEmitter":
        if not callable(listener):
            raise TypeError(f"Listener for '{event}' must be callable")
        with self._listeners_lock:
            self._listeners.setdefault(event, []).append((listener, once))
        return self

    def _discard(self, event: str, entry: Tuple[Listener, bool]):
        entries = self._listeners.get(event, [])
        for index, existing in enumerate(entries):
            if existing is entry:
                del entries[index]
                break
        if not entries:
            self._listeners.pop(event, None)
