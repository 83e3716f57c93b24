from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from importlib import resources
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_RESOURCE = "data/events.json"


@dataclass(frozen=True)
class EventRecurrence:
    period: str | None = None
    day_of_week: str | None = None
    day_of_month: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    recurrence_type: str | None = None


@dataclass(frozen=True)
class EventSession:
    session_id: int
    start: datetime
    end: datetime
    recurrence: tuple[EventRecurrence, ...] = ()


@dataclass(frozen=True)
class EventRecord:
    event_id: int
    lat: float
    long: float
    title: str | None = None
    display_name: str | None = None
    address: str | None = None
    description: str | None = None
    external_link: str | None = None
    owner_id: int | None = None
    bookmarked: bool = False
    attending: bool = False
    friend_event: bool = False
    time_captured: datetime | None = None
    sessions: tuple[EventSession, ...] = ()


def load_events(path: str | Path | None = None) -> list[EventRecord]:
    if path is None:
        raw_text = resources.files("map_engine").joinpath(DEFAULT_EVENTS_RESOURCE).read_text(encoding="utf-8")
        source = f"map_engine/{DEFAULT_EVENTS_RESOURCE}"
    else:
        raw_text = Path(path).read_text(encoding="utf-8")
        source = str(path)
    payload = json.loads(raw_text)
    if not isinstance(payload, list):
        raise ValueError(f"event feed {source} must be a JSON list")
    events = [parse_event(item) for item in payload]
    logger.info("events_loaded", extra={"component": "map_engine", "source": source, "event_count": len(events)})
    return events


def parse_event(raw: dict[str, Any]) -> EventRecord:
    if not isinstance(raw, dict):
        raise ValueError("event record must be a JSON object")
    if "id" not in raw:
        raise ValueError("event record is missing id")
    event_id = int(raw["id"])
    return EventRecord(
        event_id=event_id,
        lat=_coordinate(raw, "lat", event_id),
        long=_coordinate(raw, "long", event_id),
        title=raw.get("title"),
        display_name=raw.get("displayName"),
        address=raw.get("address"),
        description=raw.get("description"),
        external_link=raw.get("externalLink"),
        owner_id=raw.get("ownerId"),
        bookmarked=bool(raw.get("bookmarked", 0)),
        attending=bool(raw.get("attending", 0)),
        friend_event=bool(raw.get("friendEvent", 0)),
        time_captured=_time_captured(raw, event_id),
        sessions=tuple(_parse_session(item, event_id) for item in raw.get("sessions") or []),
    )


def _coordinate(raw: dict[str, Any], field: str, event_id: int) -> float:
    value = raw.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"event {event_id} has invalid {field}: {value!r}")
    return float(value)


def _time_captured(raw: dict[str, Any], event_id: int) -> datetime | None:
    value = raw.get("timeCaptured")
    if not value:
        return None
    try:
        return _parse_timestamp(value)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"event {event_id} has invalid timeCaptured: {value!r}") from exc


def _parse_session(raw: dict[str, Any], event_id: int) -> EventSession:
    try:
        return _build_session(raw)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"event {event_id} has invalid session: {exc!r}") from exc


def _build_session(raw: dict[str, Any]) -> EventSession:
    return EventSession(
        session_id=int(raw["id"]),
        start=_parse_timestamp(raw["startDateTime"]),
        end=_parse_timestamp(raw["endDateTime"]),
        recurrence=tuple(
            EventRecurrence(
                period=item.get("period"),
                day_of_week=item.get("dayOfWeek"),
                day_of_month=item.get("dayOfMonth"),
                start_time=item.get("startTime"),
                end_time=item.get("endTime"),
                recurrence_type=item.get("recurrenceType"),
            )
            for item in raw.get("recurrence") or []
        ),
    )


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
