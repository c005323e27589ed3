from typing import List

import mongomock
import pytest

from spacenews.config import Settings
from spacenews.errors import FetchError
from spacenews.models import (
    DailyImageRecord,
    EnvironmentalEvent,
    HistoricalEventRecord,
    LaunchRecord,
)
from spacenews.store import SnapshotStore

APOD: DailyImageRecord = {"title": "T", "explanation": "E", "date": "2024-01-01"}
LAUNCH: LaunchRecord = {"name": "N", "details": "D", "date_utc": "2024-01-02T00:00:00Z"}
HISTORY: List[HistoricalEventRecord] = [{"event_date_utc": "2023-01-01", "title": "H1", "details": "d1"}]
EVENTS: List[EnvironmentalEvent] = []

PAYLOADS = {
    "NASA APOD": APOD,
    "SpaceX Launch": LAUNCH,
    "SpaceX History": HISTORY,
    "NASA EONET": EVENTS,
}


class FakeFetch:
    """Stands in for fetch_json; records labels and can fail at one of them."""

    def __init__(self, fail_on=None, status=503):
        self.calls = []
        self.fail_on = fail_on
        self.status = status

    def __call__(self, url, label, headers=None, timeout=None):
        self.calls.append(label)
        if label == self.fail_on:
            raise FetchError(label, status_code=self.status)
        return PAYLOADS[label]


@pytest.fixture
def settings(tmp_path):
    return Settings(nasa_api_key="test-key", log_dir=tmp_path / "logs")


@pytest.fixture
def db():
    return mongomock.MongoClient()["space_news_test"]


@pytest.fixture
def store(db):
    return SnapshotStore(db)
