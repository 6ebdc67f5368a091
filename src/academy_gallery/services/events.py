"""Upcoming events shown on the academy home page."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from academy_gallery.adapters.eventbrite_client import EventbriteClient
from academy_gallery.domain.events import AcademyEvent


_OLDEST = datetime.min.replace(tzinfo=UTC)


def _parse_utc(value: object) -> datetime | None:
    """Parse an Eventbrite UTC timestamp; None when missing or malformed."""
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _section(event: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = event.get(key)
    return value if isinstance(value, Mapping) else {}


def _end_of(event: Mapping[str, object]) -> datetime | None:
    return _parse_utc(_section(event, "end").get("utc"))


def _ends_after(event: Mapping[str, object], moment: datetime) -> bool:
    end = _end_of(event)
    return end is not None and end > moment


def remaining_tickets(event: Mapping[str, object]) -> int:
    """Sum unsold tickets over every ticket class of an event."""
    total = 0
    for ticket_class in event.get("ticket_classes") or []:
        quantity_total = ticket_class.get("quantity_total") or 0
        quantity_sold = ticket_class.get("quantity_sold") or 0
        total += int(quantity_total) - int(quantity_sold)
    return total


def to_event(event: Mapping[str, object]) -> AcademyEvent:
    return AcademyEvent(
        id=str(event.get("id")),
        name=str(_section(event, "name").get("text") or ""),
        url=event.get("url"),
        start=_section(event, "start").get("local"),
        end=_section(event, "end").get("local"),
        remaining_tickets=remaining_tickets(event),
    )


@dataclass
class EventService:
    """Filters live Eventbrite events for display."""

    client: EventbriteClient

    async def list_events(
        self, test_mode: bool = False, now: datetime | None = None
    ) -> list[AcademyEvent]:
        """Return ongoing events, or only the most recent one in test mode."""
        payload = await self.client.list_live_events()
        events = [event for event in payload.get("events") or [] if isinstance(event, Mapping)]
        if test_mode:
            events = sorted(
                events,
                key=lambda event: _end_of(event) or _OLDEST,
                reverse=True,
            )[:1]
        else:
            current = now or datetime.now(tz=UTC)
            events = [event for event in events if _ends_after(event, current)]
        return [to_event(event) for event in events]
