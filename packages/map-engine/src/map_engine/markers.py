from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from map_engine.events import EventRecord
from map_engine.models import GeoPoint


@dataclass(frozen=True)
class Marker:
    key: str
    coordinate: GeoPoint
    title: str | None = None


def build_markers(events: Iterable[EventRecord]) -> list[Marker]:
    # keyed by feed position; records sharing a venue keep separate markers
    return [
        Marker(
            key=str(index),
            coordinate=GeoPoint(latitude=event.lat, longitude=event.long),
            title=event.title,
        )
        for index, event in enumerate(events)
    ]
