"""
errors.py
---------
Failure kinds that abort a fetch-and-store run. Nothing catches them
below the triggers, which log them and report success or failure.
"""

from __future__ import annotations

from typing import Optional


class SpaceNewsError(Exception):
    """Base class for failures that abort a fetch-and-store run."""


class FetchError(SpaceNewsError):
    """An upstream API answered non-2xx, or the request never completed."""

    def __init__(self, label: str, status_code: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        self.label = label
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            msg = f"Failed to fetch {label}, status: {status_code}"
        else:
            msg = f"Failed to fetch {label}: {cause}"
        super().__init__(msg)


class StoreError(SpaceNewsError):
    """The document store rejected a read, delete or write."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store {operation} failed: {cause}")


class AggregationFailed(SpaceNewsError):
    """One of the upstream fetches failed, so no snapshot was produced."""
