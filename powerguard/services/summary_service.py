"""Service for the overall outage summary."""
import datetime
from typing import Dict, List, Optional
from ..db.event_repository import EventRepository
from ..debug import debug_log
from ..models import EventRecord, EventSummary, parse_event_date


def average_resolved_duration(events: List[EventRecord]) -> float:
    """Mean actual duration of resolved events; 0 when none qualify."""
    durations = [e.actual_duration for e in events if e.resolved and e.actual_duration]
    if not durations:
        return 0
    return sum(durations) / len(durations)


def summarize(events: List[EventRecord]) -> EventSummary:
    """
    Reduce a collection of events to an EventSummary.

    Location counts use exact string matches; ties for the highest count go
    to the location seen first. For equal dates the later event wins.
    """
    if not events:
        return EventSummary()

    resolved = 0
    location_counts: Dict[str, int] = {}
    latest: Optional[EventRecord] = None
    latest_ts: Optional[datetime.datetime] = None

    for event in events:
        if event.resolved:
            resolved += 1
        location_counts[event.location] = location_counts.get(event.location, 0) + 1

        ts = parse_event_date(event.date)
        if latest_ts is None or ts >= latest_ts:
            latest, latest_ts = event, ts

    most_affected = ""
    highest = 0
    for location, count in location_counts.items():
        if count > highest:
            most_affected, highest = location, count

    return EventSummary(
        total_events=len(events),
        resolved_events=resolved,
        average_duration=average_resolved_duration(events),
        most_affected_location=most_affected,
        latest_event_date=latest.date if latest else "",
    )


class SummaryService:
    """Computes the summary from a fresh read of the store on every call."""

    def __init__(self, repo: Optional[EventRepository] = None) -> None:
        self.repo = repo or EventRepository()

    def get_summary(self) -> EventSummary:
        """Current summary; the empty summary if anything goes wrong."""
        try:
            return summarize(self.repo.get_all())
        except Exception as e:
            print(f"Error generating summary: {e}")
            debug_log(f"summary degraded to empty result: {e!r}")
            return EventSummary()
