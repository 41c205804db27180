"""Unit tests for the subscription store."""

from emitron.store import Subscription, SubscriptionStore


def _noop(payload, key):
    pass


class TestSubscriptionStore:
    def test_add_and_snapshot(self):
        store = SubscriptionStore()
        a = Subscription("foo", _noop)
        b = Subscription("foo", _noop)
        store.add(a)
        store.add(b)
        assert store.snapshot("foo") == [a, b]
        assert store.snapshot("bar") == []

    def test_snapshot_is_a_copy(self):
        store = SubscriptionStore()
        store.add(Subscription("foo", _noop))
        snap = store.snapshot("foo")
        store.add(Subscription("foo", _noop))
        assert len(snap) == 1

    def test_remove_handler_first_match(self):
        store = SubscriptionStore()
        a = Subscription("foo", _noop)
        b = Subscription("foo", _noop)
        store.add(a)
        store.add(b)
        assert store.remove_handler("foo", _noop) is a
        assert store.snapshot("foo") == [b]
        assert store.remove_handler("bar", _noop) is None

    def test_remove_handler_matches_wrapper(self):
        store = SubscriptionStore()
        wrapper = lambda p, k: None
        entry = Subscription("foo", _noop, wrapper)
        store.add(entry)
        assert store.remove_handler("foo", wrapper) is entry

    def test_discard_by_identity(self):
        store = SubscriptionStore()
        a = Subscription("foo", _noop)
        b = Subscription("foo", _noop)
        store.add(a)
        store.add(b)
        assert store.discard(b)
        assert not store.discard(b)
        assert store.snapshot("foo") == [a]

    def test_clear_keeps_key_empty(self):
        store = SubscriptionStore()
        store.add(Subscription("foo", _noop))
        assert len(store.clear("foo")) == 1
        assert store.clear("missing") == []
        assert store.snapshot("foo") == []
        assert "foo" not in store
        assert len(store) == 0

    def test_count_and_keys(self):
        store = SubscriptionStore()
        store.add(Subscription("foo", _noop))
        store.add(Subscription("bar", _noop))
        store.add(Subscription("bar", _noop))
        assert store.count("bar") == 2
        assert store.count() == 3
        assert list(store) == ["foo", "bar"]
