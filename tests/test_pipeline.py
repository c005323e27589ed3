import threading
import time

import pytest

from spacenews.errors import AggregationFailed, StoreError
from spacenews.pipeline import SpaceNewsRunner, fetch_and_store

from conftest import APOD, EVENTS, HISTORY, LAUNCH, FakeFetch


def test_scenario_snapshot_is_written(store, settings, db):
    db["stale"].insert_one({"x": 1})

    fetch_and_store(store, settings, fetch=FakeFetch())

    assert store.read_snapshot() == {
        "image": {"title": "T", "explanation": "E", "date": "2024-01-01"},
        "launch": {"name": "N", "details": "D", "date_utc": "2024-01-02T00:00:00Z"},
        "launchHistory": [{"event_date_utc": "2023-01-01", "title": "H1", "details": "d1"}],
        "environmentalEvents": [],
    }
    assert db["stale"].count_documents({}) == 0


def test_failed_fetch_leaves_store_empty(store, settings, db):
    db["spaceNews"].insert_one({"_id": "latest", "image": APOD})
    fetch = FakeFetch(fail_on="SpaceX History")

    with pytest.raises(AggregationFailed):
        fetch_and_store(store, settings, fetch=fetch)

    assert fetch.calls == ["NASA APOD", "SpaceX Launch", "SpaceX History"]
    assert store.read_snapshot() is None


def test_clear_failure_aborts_before_fetch(settings):
    class BrokenStore:
        def clear_all(self):
            raise StoreError("clear", RuntimeError("unavailable"))

        def write_snapshot(self, snapshot):
            raise AssertionError("write must not run")

    fetch = FakeFetch()
    with pytest.raises(StoreError):
        fetch_and_store(BrokenStore(), settings, fetch=fetch)
    assert fetch.calls == []


def test_run_order_is_clear_fetch_write(settings):
    events = []

    class RecordingStore:
        def clear_all(self):
            events.append("clear")

        def write_snapshot(self, snapshot):
            events.append("write")

    def fetch(url, label, **kwargs):
        events.append(label)
        return FakeFetch()(url, label)

    SpaceNewsRunner(RecordingStore(), settings, fetch=fetch).run()
    assert events == ["clear", "NASA APOD", "SpaceX Launch", "SpaceX History", "NASA EONET", "write"]


def test_runner_returns_snapshot(store, settings):
    snap = SpaceNewsRunner(store, settings, fetch=FakeFetch()).run()
    assert snap.to_document()["launchHistory"] == HISTORY
    assert snap.to_document()["environmentalEvents"] == EVENTS
    assert snap.launch == LAUNCH


def test_runs_are_serialised_across_runners(store, settings):
    state = {"active": 0, "max_active": 0}
    guard = threading.Lock()

    class SlowStore:
        def clear_all(self):
            with guard:
                state["active"] += 1
                state["max_active"] = max(state["max_active"], state["active"])
            time.sleep(0.05)

        def write_snapshot(self, snapshot):
            time.sleep(0.05)
            with guard:
                state["active"] -= 1

    # separate runners, as two triggers would build them
    runners = [SpaceNewsRunner(SlowStore(), settings, fetch=FakeFetch()) for _ in range(3)]
    threads = [threading.Thread(target=r.run) for r in runners]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert state["max_active"] == 1
    assert state["active"] == 0
