"""Tests for Observable and MappedObservable."""

import pytest

from livetree import (
    AbstractOperationError,
    BaseObservable,
    MappedObservable,
    Observable,
    ReadOnlyViewError,
)


class TestObservable:
    def test_value_and_set(self):
        o = Observable(42)
        assert o.value == 42
        o.set(100)
        assert o.value == 100

    def test_value_setter_delegates_to_set(self):
        o = Observable(1)
        log = []
        o.listen(log.append)
        o.value = 2
        assert log == [1, 2]

    def test_listen_replays_then_notifies(self):
        ob = Observable(1)
        log = []
        ob.listen(lambda v: log.append(v))
        assert log == [1]
        ob.set(5)
        assert log == [1, 5]

    def test_no_dedup(self):
        """Every set notifies, even with an equal value."""
        o = Observable(3)
        log = []
        o.listen(log.append)
        o.set(3)
        o.set(3)
        assert log == [3, 3, 3]

    def test_listeners_called_in_registration_order(self):
        o = Observable(0)
        log = []
        o.listen(lambda v: log.append(("a", v)))
        o.listen(lambda v: log.append(("b", v)))
        log.clear()
        o.set(1)
        assert log == [("a", 1), ("b", 1)]

    def test_unsubscribe(self):
        o = Observable(0)
        log = []
        unsub = o.listen(log.append)
        o.set(1)
        unsub()
        o.set(2)
        assert log == [0, 1]

    def test_unsubscribe_idempotent(self):
        o = Observable(0)
        a, b = [], []
        unsub_a = o.listen(a.append)
        o.listen(b.append)
        unsub_a()
        unsub_a()  # must not remove b
        o.set(1)
        assert a == [0]
        assert b == [0, 1]

    def test_unsubscribe_during_notification(self):
        """A listener removed mid-pass is not called later in that pass."""
        o = Observable(0)
        log = []
        handles = {}

        def first(v):
            log.append(("first", v))
            if "second" in handles:
                handles["second"]()

        o.listen(first)
        handles["second"] = o.listen(lambda v: log.append(("second", v)))
        log.clear()
        o.set(1)
        assert log == [("first", 1)]

    def test_listener_errors_propagate(self):
        o = Observable(0)

        def boom(v):
            if v:
                raise ValueError("boom")

        o.listen(boom)
        with pytest.raises(ValueError, match="boom"):
            o.set(1)
        assert o.value == 1

    def test_repr(self):
        assert repr(Observable(5)) == "Observable(5)"


class TestBaseObservable:
    def test_abstract_operations(self):
        base = BaseObservable()
        with pytest.raises(AbstractOperationError):
            base.value
        with pytest.raises(AbstractOperationError):
            base.set(1)
        with pytest.raises(NotImplementedError):
            base.listen(print)


class TestMappedObservable:
    def test_value_recomputes(self):
        src = Observable(2)
        doubled = src.map(lambda v: v * 2)
        assert isinstance(doubled, MappedObservable)
        assert doubled.value == 4
        src.set(10)
        assert doubled.value == 20

    def test_no_caching(self):
        calls = []
        src = Observable(1)
        mapped = src.map(lambda v: calls.append(v) or v)
        mapped.value
        mapped.value
        assert calls == [1, 1]

    def test_listen_maps_values(self):
        src = Observable("a")
        log = []
        src.map(str.upper).listen(log.append)
        src.set("b")
        assert log == ["A", "B"]

    def test_chained_maps(self):
        src = Observable(1)
        chained = src.map(lambda v: v + 1).map(lambda v: v * 10)
        assert chained.value == 20
        log = []
        chained.listen(log.append)
        src.set(2)
        assert log == [20, 30]

    def test_unsubscribe_detaches_from_source(self):
        src = Observable(0)
        log = []
        unsub = src.map(lambda v: -v).listen(log.append)
        unsub()
        src.set(5)
        assert log == [0]
        assert len(src._listeners) == 0

    def test_listen_with_owner(self):
        class Owner:
            pass

        src = Observable(1)
        owner = Owner()
        log = []
        src.map(lambda v: v * 3).listen(lambda o, v: log.append((o, v)), owner)
        src.set(2)
        assert log == [(owner, 3), (owner, 6)]

    def test_read_only(self):
        mapped = Observable(1).map(str)
        with pytest.raises(ReadOnlyViewError):
            mapped.set("x")
        with pytest.raises(ReadOnlyViewError):
            mapped.value = "x"

    def test_map_does_not_touch_source(self):
        src = Observable(7)
        src.map(lambda v: v + 1)
        assert src.value == 7
        assert len(src._listeners) == 0
