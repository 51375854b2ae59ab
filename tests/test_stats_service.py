"""Unit tests for StatsService."""
import unittest
from unittest.mock import Mock, patch
from powerguard.models import EventRecord
from powerguard.services.stats_service import StatsService


class TestStatsService(unittest.TestCase):
    """Test per-view statistics over a mocked repository."""

    def setUp(self) -> None:
        self.service = StatsService()
        self.service.repo = Mock()

    def _events(self, events: list[EventRecord]) -> None:
        self.service.repo.get_all.return_value = events

    def _event(self, id_: str, location: str = "X", estimated: float = 1.0,
               actual: float | None = None, damages: str = "",
               date: str = "2024-01-01T00:00:00.000Z") -> EventRecord:
        return EventRecord(id=id_, location=location, estimated_duration=estimated,
                           date=date, actual_duration=actual, damages=damages,
                           resolved=actual is not None)

    def test_recent_events_newest_first(self) -> None:
        old = self._event("old", date="2024-01-01T00:00:00.000Z")
        new = self._event("new", date="2024-06-01T00:00:00.000Z")
        mid = self._event("mid", date="2024-03-01T00:00:00.000Z")
        self._events([old, new, mid])

        self.assertEqual([e.id for e in self.service.recent_events()], ["new", "mid", "old"])

    def test_location_counts_first_seen_order(self) -> None:
        self._events([
            self._event("1", "Oak St"),
            self._event("2", "Elm St"),
            self._event("3", "Oak St"),
        ])

        self.assertEqual(self.service.location_counts(), [("Oak St", 2), ("Elm St", 1)])

    def test_location_counts_limit(self) -> None:
        self._events([self._event(str(i), f"Loc {i}") for i in range(10)])

        self.assertEqual(len(self.service.location_counts()), 6)
        self.assertEqual(len(self.service.location_counts(limit=3)), 3)

    def test_search_by_location_case_insensitive(self) -> None:
        self._events([
            self._event("1", "North Side"),
            self._event("2", "Southside"),
            self._event("3", "NORTHGATE"),
        ])

        self.assertEqual([e.id for e in self.service.search_by_location("north")], ["1", "3"])
        self.assertEqual(len(self.service.search_by_location("   ")), 3)

    def test_duration_category_boundaries(self) -> None:
        """Short < 2h <= Medium < 8h <= Long."""
        category = StatsService.duration_category
        self.assertEqual(category(self._event("a", estimated=1.99)), "Short")
        self.assertEqual(category(self._event("b", estimated=2)), "Medium")
        self.assertEqual(category(self._event("c", estimated=7.5)), "Medium")
        self.assertEqual(category(self._event("d", estimated=8)), "Long")

    def test_duration_category_prefers_actual_when_resolved(self) -> None:
        event = self._event("a", estimated=1.0, actual=10.0)
        self.assertEqual(StatsService.duration_category(event), "Long")

    def test_duration_category_uses_settings(self) -> None:
        with patch("powerguard.services.stats_service.settings") as settings:
            settings.short_outage_hours = 1.0
            settings.long_outage_hours = 3.0
            self.assertEqual(StatsService.duration_category(self._event("a", estimated=1.5)), "Medium")
            self.assertEqual(StatsService.duration_category(self._event("b", estimated=3.0)), "Long")

    def test_group_by_duration(self) -> None:
        self._events([
            self._event("s", estimated=1),
            self._event("m", estimated=4),
            self._event("l", estimated=12),
            self._event("s2", estimated=0.5),
        ])

        groups = self.service.group_by_duration()

        self.assertEqual(list(groups), ["Short", "Medium", "Long"])
        self.assertEqual([e.id for e in groups["Short"]], ["s", "s2"])
        self.assertEqual([e.id for e in groups["Medium"]], ["m"])
        self.assertEqual([e.id for e in groups["Long"]], ["l"])

    def test_average_and_longest(self) -> None:
        self._events([
            self._event("a", actual=3.0),
            self._event("b", actual=5.0),
            self._event("c", estimated=20.0),
            self._event("d", actual=5.0),
        ])

        self.assertEqual(self.service.average_duration(), 13.0 / 3)
        self.assertEqual(self.service.longest_outage().id, "b")  # type: ignore[union-attr]

    def test_longest_outage_none_without_resolved(self) -> None:
        self._events([self._event("a", estimated=5.0)])
        self.assertIsNone(self.service.longest_outage())
        self.assertEqual(self.service.average_duration(), 0)

    def test_events_with_damages_ignores_blank(self) -> None:
        self._events([
            self._event("a", damages="Transformer blown"),
            self._event("b", damages="   "),
            self._event("c"),
        ])

        self.assertEqual([e.id for e in self.service.events_with_damages()], ["a"])


if __name__ == "__main__":
    unittest.main()
