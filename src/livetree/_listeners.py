"""Listener registry — the subscription bookkeeping behind every observable.

Listeners live in a plain list. Each Listener records its own position so
removal is O(1): the last listener is moved into the hole. A removed
listener gets index -1, which makes removal idempotent and lets a running
notification pass skip it.

Weak owners: listen(callback, owner) holds the owner only through a
weakref. The callback receives the owner as its first argument, so it never
has to close over it. weakref.finalize unsubscribes once the owner is
reclaimed; release(owner) does the same thing deterministically.
"""

from __future__ import annotations

import logging
import weakref
from functools import partial
from typing import Callable

logger = logging.getLogger("livetree.listeners")

Unsubscribe = Callable[[], None]

# owner -> finalizers registered against it, for release()
_owned: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


class Listener:
    __slots__ = ("callback", "index")

    def __init__(self, callback: Callable, index: int) -> None:
        self.callback = callback
        self.index = index

    @property
    def active(self) -> bool:
        return self.index >= 0

    def __repr__(self) -> str:
        return f"Listener({self.callback!r}, index={self.index})"


class ListenerRegistry:
    """Ordered listener collection with swap-with-last removal."""

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self):
        return iter(self._listeners)

    def add(self, callback: Callable) -> Listener:
        listener = Listener(callback, len(self._listeners))
        self._listeners.append(listener)
        return listener

    def remove(self, listener: Listener) -> None:
        """Remove listener in O(1). Removing twice is a no-op."""
        i = listener.index
        if i < 0:
            return
        last = self._listeners.pop()
        if last is not listener:
            last.index = i
            self._listeners[i] = last
        listener.index = -1

    def notify(self, *args) -> None:
        """Call every listener present when the pass started.

        Listeners removed during the pass are skipped; listeners added
        during the pass are not visited until the next one.
        """
        for listener in list(self._listeners):
            if listener.index >= 0:
                listener.callback(*args)


def _call_with_owner(callback: Callable, ref: weakref.ref, *args) -> None:
    owner = ref()
    if owner is not None:
        callback(owner, *args)


def _finalized(registry: ListenerRegistry, listener: Listener) -> None:
    if listener.active:
        logger.debug("Owner reclaimed, dropping %r", listener)
    registry.remove(listener)


def subscribe(
    registry: ListenerRegistry,
    callback: Callable,
    owner: object | None,
    replay: Callable[[Callable], None],
) -> Unsubscribe:
    """Register callback, replay current state into it, return an unsubscribe.

    replay receives the (possibly owner-wrapped) callback and must call it
    synchronously with whatever represents the current state.
    """
    if owner is not None:
        callback = partial(_call_with_owner, callback, weakref.ref(owner))
    listener = registry.add(callback)
    try:
        replay(listener.callback)
    except BaseException:
        registry.remove(listener)
        raise
    if owner is None:
        return partial(registry.remove, listener)
    # finalize objects are callable and run at most once
    finalizer = weakref.finalize(owner, _finalized, registry, listener)
    finalizer.atexit = False
    finalizers = _owned.setdefault(owner, [])
    finalizers[:] = [f for f in finalizers if f.alive]
    finalizers.append(finalizer)
    return finalizer


def release(owner: object) -> int:
    """Unsubscribe every listener registered with owner, right now.

    Returns how many subscriptions were still live.
    """
    finalizers = _owned.pop(owner, [])
    released = 0
    for finalizer in finalizers:
        if finalizer.alive:
            released += 1
        finalizer()
    return released
