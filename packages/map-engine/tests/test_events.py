import json
from datetime import datetime, timezone

import pytest

from map_engine.events import load_events, parse_event


def test_bundled_feed_loads_every_record() -> None:
    events = load_events()

    assert len(events) == 11
    assert events[0].event_id == 1179
    assert events[0].lat == 49.228676
    assert events[0].long == -123.004795
    assert events[0].display_name == "Hilton_Vancouver_Metrotown"


def test_bundled_feed_keeps_duplicate_venues() -> None:
    events = load_events()
    bc_place = [event for event in events if event.display_name == "BC_Place"]
    assert len(bc_place) == 4
    assert len({(event.lat, event.long) for event in bc_place}) == 1


def test_parse_event_sessions_and_recurrence() -> None:
    event = parse_event(
        {
            "id": 1437,
            "lat": 49.2760688,
            "long": -123.1127117,
            "title": "BC School Sports",
            "friendEvent": 0,
            "bookmarked": 1,
            "timeCaptured": "2024-11-19T12:00:09Z",
            "sessions": [
                {
                    "id": 1787,
                    "startDateTime": "2024-11-23T17:00:00Z",
                    "endDateTime": "2024-11-23T19:00:00Z",
                    "recurrence": [{"period": None, "dayOfWeek": None, "recurrenceType": None}],
                }
            ],
        }
    )

    assert event.bookmarked is True
    assert event.friend_event is False
    assert event.time_captured == datetime(2024, 11, 19, 12, 0, 9, tzinfo=timezone.utc)
    assert len(event.sessions) == 1
    assert event.sessions[0].start == datetime(2024, 11, 23, 17, 0, tzinfo=timezone.utc)
    assert event.sessions[0].recurrence[0].recurrence_type is None


def test_parse_event_rejects_missing_coordinate() -> None:
    with pytest.raises(ValueError, match="long"):
        parse_event({"id": 1, "lat": 49.2})


def test_parse_event_rejects_non_numeric_coordinate() -> None:
    with pytest.raises(ValueError, match="lat"):
        parse_event({"id": 1, "lat": "49.2", "long": -123.0})


def test_parse_event_rejects_missing_id() -> None:
    with pytest.raises(ValueError):
        parse_event({"lat": 49.2, "long": -123.0})


def test_load_events_from_path(tmp_path) -> None:
    feed = tmp_path / "events.json"
    feed.write_text(json.dumps([{"id": 7, "lat": 49.0, "long": -123.0}]), encoding="utf-8")

    events = load_events(feed)

    assert [event.event_id for event in events] == [7]
    assert events[0].sessions == ()


def test_load_events_rejects_non_list(tmp_path) -> None:
    feed = tmp_path / "events.json"
    feed.write_text(json.dumps({"id": 7}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_events(feed)


@pytest.mark.parametrize(
    "session",
    [
        {"id": 2},
        {"id": 2, "startDateTime": "2024-11-23T17:00:00Z"},
        {"startDateTime": "2024-11-23T17:00:00Z", "endDateTime": "2024-11-23T19:00:00Z"},
        {"id": 2, "startDateTime": 1732381200, "endDateTime": "2024-11-23T19:00:00Z"},
        {"id": 2, "startDateTime": "next tuesday", "endDateTime": "2024-11-23T19:00:00Z"},
        "not-a-session",
    ],
)
def test_parse_event_rejects_malformed_session(session) -> None:
    with pytest.raises(ValueError, match="event 1 has invalid session"):
        parse_event({"id": 1, "lat": 49.2, "long": -123.0, "sessions": [session]})


def test_parse_event_rejects_malformed_time_captured() -> None:
    with pytest.raises(ValueError, match="event 1 has invalid timeCaptured"):
        parse_event({"id": 1, "lat": 49.2, "long": -123.0, "timeCaptured": 1732381200})
