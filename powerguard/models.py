"""
Data models for the application.
"""
import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Natural events a user can tag an outage with
NATURAL_CAUSES = (
    'Heavy Rain',
    'Thunderstorm',
    'Hurricane',
    'Tornado',
    'Flooding',
    'Landslide',
    'Strong Wind',
    'Snow/Ice',
    'Extreme Heat',
    'Earthquake',
)


def parse_event_date(value: str) -> datetime.datetime:
    """Parse a stored ISO-8601 date; a trailing 'Z' means UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def unique_causes(causes: List[str]) -> List[str]:
    """Drop repeated causes, keeping the first occurrence of each."""
    return list(dict.fromkeys(causes))


@dataclass
class EventDraft:
    """An outage as entered by the user, before the store assigns id and date."""
    location: str
    estimated_duration: float
    damages: str = ""
    causes: List[str] = field(default_factory=list)
    actual_duration: Optional[float] = None
    resolved: bool = False

    def __post_init__(self) -> None:
        self.causes = unique_causes(self.causes)

    def toggle_cause(self, cause: str) -> None:
        """Add the cause if absent, remove it if present."""
        if cause in self.causes:
            self.causes = [c for c in self.causes if c != cause]
        else:
            self.causes = self.causes + [cause]


@dataclass
class EventRecord:
    """A single reported power outage as persisted by the store."""
    id: str
    location: str
    estimated_duration: float
    date: str
    actual_duration: Optional[float] = None
    damages: str = ""
    resolved: bool = False
    causes: List[str] = field(default_factory=list)

    @classmethod
    def from_draft(cls, draft: EventDraft, id: str, date: str) -> "EventRecord":
        return cls(
            id=id,
            location=draft.location,
            estimated_duration=draft.estimated_duration,
            date=date,
            actual_duration=draft.actual_duration,
            damages=draft.damages,
            resolved=draft.resolved,
            causes=list(draft.causes),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the stored (camelCase) field names."""
        return {
            "id": self.id,
            "location": self.location,
            "estimatedDuration": self.estimated_duration,
            "actualDuration": self.actual_duration,
            "damages": self.damages,
            "date": self.date,
            "resolved": self.resolved,
            "causes": list(self.causes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventRecord":
        """
        Build a record from its stored form.

        Raises KeyError or TypeError when a required field is missing or
        the entry is not a mapping, and ValueError when `date` is not an
        ISO-8601 timestamp.
        """
        date = data["date"]
        if not isinstance(date, str):
            raise ValueError(f"event date must be an ISO-8601 string, got {date!r}")
        parse_event_date(date)

        return cls(
            id=str(data["id"]),
            location=data["location"],
            estimated_duration=data["estimatedDuration"],
            date=date,
            actual_duration=data.get("actualDuration"),
            damages=data.get("damages") or "",
            resolved=bool(data.get("resolved", False)),
            causes=list(data.get("causes") or []),
        )


@dataclass
class EventSummary:
    """Aggregate statistics over all events, recomputed on every request."""
    total_events: int = 0
    resolved_events: int = 0
    average_duration: float = 0
    most_affected_location: str = ""
    latest_event_date: str = ""
