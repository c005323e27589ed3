"""
aggregate.py
------------
Fetches the four space news sources one after another and assembles
them into a single AggregatedSnapshot.

The sources are requested strictly in order. The first failure ends the
cycle: later sources are not requested and no partial snapshot is built.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from spacenews.config import (
    NASA_EONET_URL,
    SPACEX_HIST_URL,
    SPACEX_LAUNCH_URL,
    Settings,
)
from spacenews.errors import FetchError
from spacenews.fetch_client import fetch_json, preview
from spacenews.models import AggregatedSnapshot

logger = logging.getLogger(__name__)

FetchFn = Callable[..., Any]


def endpoints(settings: Settings) -> List[Tuple[str, str, str]]:
    """(snapshot field, label, url) for every source, in fetch order."""
    return [
        ("image",               "NASA APOD",      settings.apod_url),
        ("launch",              "SpaceX Launch",  SPACEX_LAUNCH_URL),
        ("launchHistory",       "SpaceX History", SPACEX_HIST_URL),
        ("environmentalEvents", "NASA EONET",     NASA_EONET_URL),
    ]


def aggregate(settings: Settings, fetch: FetchFn = fetch_json) -> Optional[AggregatedSnapshot]:
    """Return the combined snapshot, or None if any source failed."""
    logger.info("Starting to fetch all space-related data...")
    parts = {}
    try:
        for field, label, url in endpoints(settings):
            data = fetch(url, label, timeout=settings.http_timeout_seconds)
            logger.info(f"{label} data fetched: {preview(data)}")
            parts[field] = data
    except FetchError as e:
        logger.error(f"Error fetching space news: {e}")
        return None

    return AggregatedSnapshot(**parts)
