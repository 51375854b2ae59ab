"""Service for recording and resolving outages from user input."""
import dataclasses
import math
from typing import Dict, Iterable, Optional, Union
from ..db.event_repository import EventRepository
from ..exceptions import ValidationError
from ..models import NATURAL_CAUSES, EventDraft, EventRecord

DurationInput = Union[str, float, int, None]


def parse_duration(value: DurationInput, missing_message: str) -> float:
    """
    Parse a duration in hours as typed by the user.

    Raises:
        ValueError: with `missing_message` if blank, or
            "Please enter a valid duration" if not a positive number
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(missing_message)
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValueError("Please enter a valid duration") from None
    if not math.isfinite(hours) or hours <= 0:
        raise ValueError("Please enter a valid duration")
    return hours


class OutageService:
    """Validates form input and drives the store for the add and resolve flows."""

    def __init__(self, repo: Optional[EventRepository] = None) -> None:
        self.repo = repo or EventRepository()

    def record_outage(self, location: str, estimated_duration: DurationInput,
                      causes: Iterable[str] = (), damages: str = "") -> EventRecord:
        """
        Validate a new outage report and store it.

        Raises:
            ValidationError: field -> message for every invalid field
            PersistenceError: if the store could not save it
        """
        errors: Dict[str, str] = {}

        if not location or not location.strip():
            errors["location"] = "Location is required"

        hours = 0.0
        try:
            hours = parse_duration(estimated_duration, "Estimated duration is required")
        except ValueError as e:
            errors["estimated_duration"] = str(e)

        cause_list = list(causes)
        unknown = [c for c in cause_list if c not in NATURAL_CAUSES]
        if unknown:
            errors["causes"] = f"Unknown cause: {', '.join(unknown)}"

        if errors:
            raise ValidationError(errors)

        draft = EventDraft(
            location=location,
            estimated_duration=hours,
            damages=damages,
            causes=cause_list,
        )
        return self.repo.add(draft)

    def resolve_outage(self, event_id: str, actual_duration: DurationInput) -> EventRecord:
        """
        Mark an outage resolved with its actual duration.

        Only `resolved` and `actual_duration` change, so resolving again
        with the same value writes an identical record.

        Raises:
            ValidationError: bad duration, or no event with this id
            PersistenceError: if the store could not save it
        """
        try:
            hours = parse_duration(actual_duration, "Please enter the actual outage duration")
        except ValueError as e:
            raise ValidationError({"actual_duration": str(e)}) from None

        event = self.repo.get(event_id)
        if event is None:
            raise ValidationError({"id": "Event not found"})

        resolved = dataclasses.replace(event, resolved=True, actual_duration=hours)
        if not self.repo.update(resolved):
            # Removed between the read and the write
            raise ValidationError({"id": "Event not found"})
        return resolved
