"""Observable values and arrays — state that pushes changes to its listeners.

Listeners are called synchronously, in-line with the mutation that caused
them. There is no batching and no dependency graph: each observable keeps a
direct list of callbacks.

Observable replays its current value into every new listener.
ObservableArray replays its whole contents as one synthetic insert event
(0, 0, *items) and afterwards sends incremental splice diffs, so a
listener can build and maintain its view from diff events alone.

Mapped views are read-only and cache nothing: every read recomputes.

Thread safety: call set_scheduler() once from the main thread. After that,
any Observable.set() from a background thread is auto-marshaled. Main-thread
.set() remains synchronous.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from livetree._errors import AbstractOperationError, ReadOnlyViewError
from livetree._listeners import ListenerRegistry, Unsubscribe, subscribe

T = TypeVar("T")
U = TypeVar("U")

# ─── Auto-marshal ────────────────────────────────────────────────────────────
_scheduler = None
_scheduler_thread = None


def set_scheduler(scheduler) -> None:
    """Set the global thread scheduler for cross-thread mutations.

    Call once from the main/UI thread:
        livetree.set_scheduler(app.call_from_thread)

    After this, any Observable.set() from a background thread is automatically
    marshaled. Main-thread mutations remain synchronous.
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread()


def dispatch(fn: Callable, *args) -> None:
    """Run fn(*args) now, or hand it to the scheduler when off its thread."""
    if _scheduler is not None and threading.current_thread() != _scheduler_thread:
        _scheduler(lambda: fn(*args))
    else:
        fn(*args)


# ─── Single values ───────────────────────────────────────────────────────────


class BaseObservable(Generic[T]):
    """Common surface of Observable and MappedObservable."""

    __slots__ = ("__weakref__",)

    @property
    def value(self) -> T:
        raise AbstractOperationError("value")

    def set(self, value: T) -> None:
        raise AbstractOperationError("set")

    def listen(self, callback: Callable, owner: object | None = None) -> Unsubscribe:
        raise AbstractOperationError("listen")

    def map(self, fn: Callable[[T], U]) -> MappedObservable[U]:
        return MappedObservable(self, fn)


class Observable(BaseObservable[T]):
    """A single mutable value cell."""

    __slots__ = ("_value", "_listeners")

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners = ListenerRegistry()

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def set(self, value: T) -> None:
        """Write a new value and notify. Auto-marshals from background threads."""
        dispatch(self._set_direct, value)

    def _set_direct(self, value: T) -> None:
        self._value = value
        self._listeners.notify(value)

    def listen(self, callback: Callable, owner: object | None = None) -> Unsubscribe:
        """Call callback(value) now and after every set().

        With an owner, the callback is invoked as callback(owner, value) and
        is dropped once the owner is garbage collected.
        """
        return subscribe(self._listeners, callback, owner, lambda cb: cb(self._value))

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"


class MappedObservable(BaseObservable[T]):
    """Read-only view applying fn to another observable's value on every read."""

    __slots__ = ("_source", "_fn")

    def __init__(self, source: BaseObservable, fn: Callable) -> None:
        self._source = source
        self._fn = fn

    @property
    def value(self) -> T:
        return self._fn(self._source.value)

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def set(self, value: T) -> None:
        raise ReadOnlyViewError("Cannot set a mapped observable")

    def listen(self, callback: Callable, owner: object | None = None) -> Unsubscribe:
        fn = self._fn
        if owner is None:
            return self._source.listen(lambda v: callback(fn(v)))
        return self._source.listen(lambda o, v: callback(o, fn(v)), owner)

    def __repr__(self) -> str:
        return f"MappedObservable({self._source!r}, {self._fn!r})"


# ─── Arrays ──────────────────────────────────────────────────────────────────


def _normalize_splice(length: int, index: int, delete_count: int | None) -> tuple[int, int]:
    """Clamp splice arguments to the array bounds.

    Negative indices count from the end. delete_count=None deletes to the end.
    """
    if index < 0:
        index = max(length + index, 0)
    else:
        index = min(index, length)
    if delete_count is None:
        delete_count = length - index
    else:
        delete_count = max(0, min(delete_count, length - index))
    return index, delete_count


class BaseObservableArray(Generic[T]):
    """Common surface of ObservableArray and MappedObservableArray.

    Every mutation helper is defined in terms of splice().
    """

    __slots__ = ("__weakref__",)

    @property
    def length(self) -> int:
        raise AbstractOperationError("length")

    @property
    def value(self) -> list[T]:
        raise AbstractOperationError("value")

    def get(self, index: int) -> T:
        raise AbstractOperationError("get")

    def splice(self, index: int, delete_count: int | None = None, *items: T) -> list[T]:
        raise AbstractOperationError("splice")

    def remove(self, item: T) -> None:
        raise AbstractOperationError("remove")

    def listen(self, callback: Callable, owner: object | None = None) -> Unsubscribe:
        raise AbstractOperationError("listen")

    def push(self, *items: T) -> int:
        self.splice(self.length, 0, *items)
        return self.length

    def pop(self) -> T:
        if not self.length:
            raise IndexError("pop from empty array")
        return self.splice(self.length - 1, 1)[0]

    def unshift(self, *items: T) -> int:
        self.splice(0, 0, *items)
        return self.length

    def shift(self) -> T:
        if not self.length:
            raise IndexError("shift from empty array")
        return self.splice(0, 1)[0]

    def map(self, fn: Callable[[T], U]) -> MappedObservableArray[U]:
        return MappedObservableArray(self, fn)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[T]:
        return iter(self.value)


class ObservableArray(BaseObservableArray[T]):
    """A mutable sequence that notifies listeners with splice diffs.

    Listeners are called as callback(index, delete_count, *inserted).
    """

    __slots__ = ("_items", "_listeners")

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self._listeners = ListenerRegistry()

    @property
    def length(self) -> int:
        return len(self._items)

    @property
    def value(self) -> list[T]:
        """A snapshot copy of the current items."""
        return list(self._items)

    def get(self, index: int) -> T:
        return self._items[index]

    def index_of(self, item: T) -> int:
        try:
            return self._items.index(item)
        except ValueError:
            return -1

    def splice(self, index: int, delete_count: int | None = None, *items: T) -> list[T]:
        """Replace delete_count items starting at index with items.

        Returns the removed items. Listeners receive the normalized index and
        delete_count, so replaying events on a plain list always agrees with
        this array.
        """
        index, delete_count = _normalize_splice(len(self._items), index, delete_count)
        end = index + delete_count
        removed = self._items[index:end]
        self._items[index:end] = items
        self._listeners.notify(index, delete_count, *items)
        return removed

    def remove(self, item: T) -> None:
        """Remove the first item equal to item. Absent items are ignored."""
        index = self.index_of(item)
        if index >= 0:
            self.splice(index, 1)

    def listen(self, callback: Callable, owner: object | None = None) -> Unsubscribe:
        """Call callback(0, 0, *items) now and once per later splice.

        With an owner, the callback is invoked as callback(owner, ...) and is
        dropped once the owner is garbage collected.
        """
        return subscribe(
            self._listeners, callback, owner, lambda cb: cb(0, 0, *self._items)
        )

    def __repr__(self) -> str:
        return f"ObservableArray({self._items!r})"


class MappedObservableArray(BaseObservableArray[T]):
    """Read-only view applying fn to each item of another array, lazily."""

    __slots__ = ("_source", "_fn")

    def __init__(self, source: BaseObservableArray, fn: Callable) -> None:
        self._source = source
        self._fn = fn

    @property
    def length(self) -> int:
        return self._source.length

    @property
    def value(self) -> list[T]:
        return [self._fn(item) for item in self._source.value]

    def get(self, index: int) -> T:
        return self._fn(self._source.get(index))

    def splice(self, index: int, delete_count: int | None = None, *items: T) -> list[T]:
        raise ReadOnlyViewError("Cannot splice a mapped array")

    def remove(self, item: T) -> None:
        raise ReadOnlyViewError("Cannot remove from a mapped array")

    # Read-only even when empty.
    def pop(self) -> T:
        raise ReadOnlyViewError("Cannot pop from a mapped array")

    def shift(self) -> T:
        raise ReadOnlyViewError("Cannot shift from a mapped array")

    def listen(self, callback: Callable, owner: object | None = None) -> Unsubscribe:
        """Forward the source's diffs with inserted items passed through fn.

        The returned handle unsubscribes from the source.
        """
        fn = self._fn
        if owner is None:
            return self._source.listen(
                lambda index, count, *items: callback(index, count, *map(fn, items))
            )
        return self._source.listen(
            lambda o, index, count, *items: callback(o, index, count, *map(fn, items)),
            owner,
        )

    def __repr__(self) -> str:
        return f"MappedObservableArray({self._source!r}, {self._fn!r})"
