"""
fetch_client.py
---------------
GET a JSON document from an upstream API with timing and logging.
Raises FetchError on non-2xx, transport failure or a non-JSON body.
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Mapping, Optional

import requests

from spacenews.errors import FetchError

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100
_KEY_PARAM = re.compile(r"(api_key=)[^&]+")


def preview(data: Any, limit: int = PREVIEW_CHARS) -> str:
    """First `limit` characters of the JSON encoding of `data`."""
    return json.dumps(data, default=str)[:limit]


def _redact(url: str) -> str:
    return _KEY_PARAM.sub(r"\1***", url)


def fetch_json(url: str, label: str, headers: Optional[Mapping[str, str]] = None,
               timeout: float = 60.0) -> Any:
    start = time.monotonic()
    logger.info(f"Starting to fetch data from {label}: {_redact(url)}")

    def elapsed_ms() -> int:
        return int((time.monotonic() - start) * 1000)

    try:
        resp = requests.get(url, headers=dict(headers or {}), timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Error fetching {label} after {elapsed_ms()}ms: {e}")
        raise FetchError(label, cause=e) from e

    if not 200 <= resp.status_code < 300:
        err = FetchError(label, status_code=resp.status_code)
        logger.error(f"Error fetching {label} after {elapsed_ms()}ms: {err}")
        raise err

    try:
        data = resp.json()
    except ValueError as e:
        logger.error(f"Error fetching {label} after {elapsed_ms()}ms: invalid JSON body ({e})")
        raise FetchError(label, cause=e) from e

    logger.info(f"{label} fetched successfully in {elapsed_ms()}ms")
    logger.debug(f"{label} returned data: {preview(data)}...")
    return data
