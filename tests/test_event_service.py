"""Tests for Eventbrite event filtering."""

import asyncio
from datetime import UTC, datetime

from academy_gallery.services.events import EventService, remaining_tickets
from tests.conftest import FakeEventbriteClient

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def _event(event_id: str, end_utc: str, tickets: list[dict[str, int]] | None = None):  # type: ignore[no-untyped-def]
    return {
        "id": event_id,
        "name": {"text": f"Camp {event_id}"},
        "url": f"https://eventbrite.example/e/{event_id}",
        "start": {"local": "2025-07-01T09:00:00", "utc": "2025-07-01T07:00:00Z"},
        "end": {"local": "2025-07-05T17:00:00", "utc": end_utc},
        "ticket_classes": tickets or [],
    }


def test_remaining_tickets_sums_ticket_classes() -> None:
    event = _event(
        "1",
        "2025-07-05T15:00:00Z",
        [
            {"quantity_total": 30, "quantity_sold": 12},
            {"quantity_total": 10},
            {"quantity_sold": 0},
        ],
    )

    assert remaining_tickets(event) == 28
    assert remaining_tickets({"id": "x"}) == 0


def test_list_events_keeps_unfinished_events() -> None:
    client = FakeEventbriteClient(
        payload={
            "events": [
                _event("past", "2025-05-01T15:00:00Z"),
                _event("future", "2025-07-05T15:00:00Z", [{"quantity_total": 5, "quantity_sold": 1}]),
            ]
        }
    )

    events = asyncio.run(EventService(client).list_events(now=NOW))

    assert [event.id for event in events] == ["future"]
    assert events[0].to_payload() == {
        "id": "future",
        "name": "Camp future",
        "url": "https://eventbrite.example/e/future",
        "start": "2025-07-01T09:00:00",
        "end": "2025-07-05T17:00:00",
        "remaining_tickets": 4,
    }


def test_test_mode_returns_latest_event_even_if_finished() -> None:
    client = FakeEventbriteClient(
        payload={
            "events": [
                _event("old", "2024-01-01T10:00:00Z"),
                _event("latest", "2025-05-01T10:00:00Z"),
                _event("older", "2024-06-01T10:00:00Z"),
            ]
        }
    )

    events = asyncio.run(EventService(client).list_events(test_mode=True, now=NOW))

    assert [event.id for event in events] == ["latest"]


def test_no_events() -> None:
    events = asyncio.run(EventService(FakeEventbriteClient()).list_events(now=NOW))

    assert events == []


def test_events_without_usable_end_date_are_dropped() -> None:
    undated = _event("undated", "")
    del undated["end"]
    client = FakeEventbriteClient(
        payload={
            "events": [
                _event("future", "2025-07-05T15:00:00Z"),
                undated,
                _event("garbled", "not-a-date"),
            ]
        }
    )

    events = asyncio.run(EventService(client).list_events(now=NOW))

    assert [event.id for event in events] == ["future"]


def test_test_mode_ranks_undated_events_last() -> None:
    client = FakeEventbriteClient(
        payload={"events": [_event("undated", ""), _event("dated", "2024-01-01T10:00:00Z")]}
    )

    events = asyncio.run(EventService(client).list_events(test_mode=True, now=NOW))

    assert [event.id for event in events] == ["dated"]
