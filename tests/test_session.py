"""
Tests for editor sessions and the session store.
"""
import pytest

from sql2dsql.core.session import (
    FAILED, READY, SUBMITTED, EditorSession, SessionStore,
)
from sql2dsql.core.settings import DEFAULT_SOURCE

from conftest import FakeClient


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_new_session_defaults():
    s = EditorSession()
    assert s.source == DEFAULT_SOURCE
    assert s.output == ""
    assert s.status == READY
    assert len(s.id) == 12


def test_process_success_reformats_reply():
    client = FakeClient(reply="[{a 1, b 2} {a 1, b 2}]")
    s = EditorSession(source="SELECT 1")

    assert s.process(client) is True
    assert client.calls == ["SELECT 1"]
    assert s.output == "[{a 1\n  b 2}\n\n {a 1\n  b 2}]"
    assert s.status == SUBMITTED


def test_process_failure_shows_error():
    client = FakeClient(reply="[{a 1, b 2}]", error="Could not reach backend")
    s = EditorSession(source="SELECT 1", output="previous")

    assert s.process(client) is False
    assert s.output == "Error: Could not reach backend"
    assert s.status == FAILED


def test_status_resets_after_delay():
    clock = FakeClock()
    s = EditorSession(status_reset_seconds=3.0, clock=clock)
    s.set_status(SUBMITTED)
    assert s.status == SUBMITTED

    clock.now += 2.9
    assert s.status == SUBMITTED

    clock.now += 1.0
    assert s.status == READY


def test_newer_status_restarts_timer():
    clock = FakeClock()
    s = EditorSession(status_reset_seconds=3.0, clock=clock)
    s.set_status(SUBMITTED)
    clock.now += 2.0
    s.set_status(FAILED)
    clock.now += 2.0
    assert s.status == FAILED


def test_store_create_and_get():
    store = SessionStore(default_source="SELECT 2;", status_reset_seconds=1.0)
    s = store.create()
    assert s.source == "SELECT 2;"
    assert s.status_reset_seconds == 1.0
    assert store.get(s.id) is s
    assert s.id in store
    assert len(store) == 1


def test_store_get_unknown_raises():
    with pytest.raises(KeyError):
        SessionStore().get("missing")


def test_store_get_or_create():
    store = SessionStore()
    s = store.get_or_create(None)
    assert store.get_or_create(s.id) is s
    other = store.get_or_create("not-a-real-id")
    assert other is not s
    assert len(store) == 2


def test_store_delete():
    store = SessionStore()
    s = store.create()
    store.delete(s.id)
    assert s.id not in store
    with pytest.raises(ValueError, match="not found"):
        store.delete(s.id)


def test_store_is_bounded():
    store = SessionStore(max_sessions=3)
    for _ in range(10):
        store.get_or_create(None)
    assert len(store) == 3


def test_store_evicts_least_recently_used():
    store = SessionStore(max_sessions=2)
    first = store.create()
    second = store.create()
    store.get(first.id)  # touch: second is now the oldest
    third = store.create()
    assert first.id in store
    assert third.id in store
    assert second.id not in store


def test_store_rejects_empty_cap():
    with pytest.raises(ValueError):
        SessionStore(max_sessions=0)
