"""
models.py
---------
Shapes of the upstream payloads and the aggregated snapshot.

Upstream records are NOT validated: the TypedDicts below only describe what
the APIs are expected to return. Whatever arrives is stored as-is.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field


class DailyImageRecord(TypedDict):
    title: str
    explanation: str
    date: str              # YYYY-MM-DD


class LaunchRecord(TypedDict):
    name: str
    details: Optional[str]
    date_utc: str


class HistoricalEventRecord(TypedDict):
    event_date_utc: str
    title: str
    details: str


class EventCategory(TypedDict):
    id: str
    title: str


class EnvironmentalEvent(TypedDict):
    id: str
    title: str
    description: str
    link: str
    categories: List[EventCategory]


class AggregatedSnapshot(BaseModel):
    """The single persisted document: one fetch cycle of all four sources."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Fields stay Any so pydantic never coerces or drops upstream keys.
    image: Any
    # /launches/next returns one LaunchRecord; a list would be stored unchanged
    launch: Any
    launch_history: Any = Field(alias="launchHistory")
    environmental_events: Any = Field(alias="environmentalEvents")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
