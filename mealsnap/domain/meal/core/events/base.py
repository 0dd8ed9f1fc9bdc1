"""Common fields of workflow events."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


def new_event_header() -> Dict[str, Any]:
    """Fresh ``event_id``/``occurred_at`` pair for an event's ``create()``."""
    return {"event_id": uuid4(), "occurred_at": datetime.now(timezone.utc)}


@dataclass(frozen=True)
class DomainEvent:
    """
    Something the capture workflow already did.

    Subscribers render from these records and never mutate them; the UTC
    timestamp lets a log of events be replayed in order.

    Raises:
        ValueError: If occurred_at carries no timezone.
    """

    event_id: UUID
    occurred_at: datetime

    def __post_init__(self) -> None:
        if self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware (use UTC)")

    @property
    def event_name(self) -> str:
        return type(self).__name__
