"""Service for per-view statistics (locations, durations, damages)."""
from typing import Dict, List, Optional, Tuple
from ..config import settings
from ..db.event_repository import EventRepository
from ..models import EventRecord, parse_event_date
from .summary_service import average_resolved_duration

DURATION_CATEGORIES = ("Short", "Medium", "Long")


class StatsService:
    """Derived lists and figures for the browsing views."""

    def __init__(self, repo: Optional[EventRepository] = None) -> None:
        self.repo = repo or EventRepository()

    def recent_events(self) -> List[EventRecord]:
        """All events, newest first."""
        return sorted(self.repo.get_all(), key=lambda e: parse_event_date(e.date), reverse=True)

    # --- Locations ---

    def location_counts(self, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """
        Events per location, in the order each location first appears.

        Returns:
            List of (location, count) tuples, at most `limit` long
            (defaults to the location_stats_limit setting)
        """
        counts: Dict[str, int] = {}
        for event in self.repo.get_all():
            counts[event.location] = counts.get(event.location, 0) + 1

        if limit is None:
            limit = settings.location_stats_limit
        return list(counts.items())[:limit]

    def search_by_location(self, query: str) -> List[EventRecord]:
        """Case-insensitive substring match on location; blank query matches all."""
        events = self.repo.get_all()
        needle = query.strip().lower()
        if not needle:
            return events
        return [e for e in events if needle in e.location.lower()]

    # --- Durations ---

    @staticmethod
    def duration_category(event: EventRecord) -> str:
        """Short/Medium/Long, by actual duration once resolved, else estimate."""
        if event.resolved and event.actual_duration:
            hours = event.actual_duration
        else:
            hours = event.estimated_duration

        if hours < settings.short_outage_hours:
            return "Short"
        if hours < settings.long_outage_hours:
            return "Medium"
        return "Long"

    def group_by_duration(self) -> Dict[str, List[EventRecord]]:
        groups: Dict[str, List[EventRecord]] = {c: [] for c in DURATION_CATEGORIES}
        for event in self.repo.get_all():
            groups[self.duration_category(event)].append(event)
        return groups

    def average_duration(self) -> float:
        return average_resolved_duration(self.repo.get_all())

    def longest_outage(self) -> Optional[EventRecord]:
        """Resolved event with the largest actual duration (first wins ties)."""
        longest: Optional[EventRecord] = None
        for event in self.repo.get_all():
            if not (event.resolved and event.actual_duration):
                continue
            if longest is None or event.actual_duration > (longest.actual_duration or 0):
                longest = event
        return longest

    # --- Damages ---

    @staticmethod
    def has_damages(event: EventRecord) -> bool:
        return bool(event.damages and event.damages.strip())

    def events_with_damages(self) -> List[EventRecord]:
        return [e for e in self.repo.get_all() if self.has_damages(e)]
