"""Academy event models."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class AcademyEvent:
    """An upcoming academy camp or session sold on Eventbrite."""

    id: str
    name: str
    url: str | None
    start: str | None
    end: str | None
    remaining_tickets: int

    def to_payload(self) -> dict[str, object]:
        return asdict(self)
