"""
pipeline.py
-----------
The one unit of work shared by both triggers:

    clear store -> fetch all sources -> write snapshot

Any failure ends the run. Nothing is retried or rolled back, so a failure
after the clear leaves the store empty until the next successful run.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from spacenews.aggregate import FetchFn, aggregate
from spacenews.config import Settings, load_settings, setup_logging
from spacenews.errors import AggregationFailed
from spacenews.fetch_client import fetch_json
from spacenews.models import AggregatedSnapshot
from spacenews.store import SnapshotStore, connect_store

logger = logging.getLogger(__name__)

# Shared by every runner in the process
_RUN_LOCK = threading.Lock()


def fetch_and_store(store: SnapshotStore, settings: Settings,
                    fetch: FetchFn = fetch_json) -> AggregatedSnapshot:
    store.clear_all()
    snapshot = aggregate(settings, fetch=fetch)
    if snapshot is None:
        raise AggregationFailed("space news aggregation failed; nothing stored")
    store.write_snapshot(snapshot)
    logger.info("Space news successfully stored.")
    return snapshot


class SpaceNewsRunner:
    """Dependencies for a run, built once at process start.

    Runs are serialised through a process-wide lock, so an on-demand call
    and a scheduled call in the same process never interleave one run's
    clear with another's write. Separate processes are not coordinated.
    """

    def __init__(self, store: SnapshotStore, settings: Settings,
                 fetch: Optional[FetchFn] = None):
        self.store = store
        self.settings = settings
        self.fetch = fetch or fetch_json

    def run(self) -> AggregatedSnapshot:
        with _RUN_LOCK:
            return fetch_and_store(self.store, self.settings, fetch=self.fetch)


def create_runner(settings: Optional[Settings] = None) -> SpaceNewsRunner:
    """Process start: read settings, set up logging, open the store."""
    settings = settings or load_settings()
    setup_logging(settings)
    return SpaceNewsRunner(connect_store(settings), settings)
