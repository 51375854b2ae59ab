"""Unit tests for EventRepository."""
import json
import os
import sqlite3
import tempfile
import threading
import unittest
from unittest.mock import patch
import dataclasses
from powerguard.db.connection import ensure_db_exists
from powerguard.db.event_repository import EventRepository
from powerguard.db.kv_store import KeyValueStore
from powerguard.exceptions import PersistenceError
from powerguard.models import EventDraft, EventSummary
from powerguard.services import StatsService, SummaryService

KEY = "@PowerGuardTest:events"


class TestEventRepository(unittest.TestCase):
    """Test the whole-collection event store against a temporary SQLite file."""

    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.tmpdir.name, "events.db")
        ensure_db_exists(self.db_path)
        self.store = KeyValueStore(self.db_path)
        self.repo = EventRepository(self.store, key=KEY)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _draft(self, location: str = "Downtown", hours: float = 2.5, **kwargs: object) -> EventDraft:
        return EventDraft(location=location, estimated_duration=hours, **kwargs)  # type: ignore[arg-type]

    def test_empty_store_returns_empty_list(self) -> None:
        """Never-written key reads as no events."""
        self.assertEqual(self.repo.get_all(), [])
        self.assertIsNone(self.store.get_item(KEY))

    def test_add_assigns_id_and_date(self) -> None:
        """add fills in id, date and keeps the draft's fields."""
        event = self.repo.add(self._draft(causes=["Heavy Rain"]))

        self.assertTrue(event.id)
        self.assertTrue(event.date.endswith("Z"))
        self.assertEqual(event.location, "Downtown")
        self.assertEqual(event.estimated_duration, 2.5)
        self.assertFalse(event.resolved)
        self.assertIsNone(event.actual_duration)
        self.assertEqual(event.causes, ["Heavy Rain"])

    def test_get_all_returns_adds_in_call_order(self) -> None:
        """Sequence of adds comes back in call order with unique ids."""
        created = [self.repo.add(self._draft(location=f"Area {i}")) for i in range(5)]

        events = self.repo.get_all()

        self.assertEqual(events, created)
        self.assertEqual(len({e.id for e in events}), 5)

    def test_add_preserves_cause_order(self) -> None:
        """Caller's cause ordering is stored as given."""
        causes = ["Tornado", "Heavy Rain", "Flooding"]
        event = self.repo.add(self._draft(causes=causes))

        self.assertEqual(self.repo.get(event.id).causes, causes)  # type: ignore[union-attr]

    def test_get_missing_id_returns_none(self) -> None:
        self.repo.add(self._draft())
        self.assertIsNone(self.repo.get("no-such-id"))

    def test_update_replaces_in_place(self) -> None:
        """Updated record keeps its position; others are unchanged."""
        first = self.repo.add(self._draft(location="A"))
        second = self.repo.add(self._draft(location="B"))
        third = self.repo.add(self._draft(location="C"))
        before = [e.to_dict() for e in self.repo.get_all()]

        changed = dataclasses.replace(second, resolved=True, actual_duration=4.0)
        self.assertTrue(self.repo.update(changed))

        after = self.repo.get_all()
        self.assertEqual([e.id for e in after], [first.id, second.id, third.id])
        self.assertEqual(after[1], changed)
        self.assertEqual(after[0].to_dict(), before[0])
        self.assertEqual(after[2].to_dict(), before[2])

    def test_update_unknown_id_is_noop(self) -> None:
        """No insertion and no write for an unknown id."""
        event = self.repo.add(self._draft())
        raw_before = self.store.get_item(KEY)

        ghost = dataclasses.replace(event, id="ghost", location="Elsewhere")
        self.assertFalse(self.repo.update(ghost))

        self.assertEqual(self.store.get_item(KEY), raw_before)
        self.assertEqual(self.repo.get_all(), [event])

    def test_resolve_twice_is_idempotent(self) -> None:
        event = self.repo.add(self._draft())
        resolved = dataclasses.replace(event, resolved=True, actual_duration=3.0)

        self.repo.update(resolved)
        raw_once = self.store.get_item(KEY)
        self.repo.update(resolved)

        self.assertEqual(self.store.get_item(KEY), raw_once)

    def test_remove_then_get_returns_none(self) -> None:
        keep = self.repo.add(self._draft(location="Keep"))
        drop = self.repo.add(self._draft(location="Drop"))

        self.assertTrue(self.repo.remove(drop.id))

        self.assertIsNone(self.repo.get(drop.id))
        self.assertEqual(self.repo.get_all(), [keep])

    def test_remove_unknown_id_leaves_collection(self) -> None:
        event = self.repo.add(self._draft())
        self.assertFalse(self.repo.remove("missing"))
        self.assertEqual(self.repo.get_all(), [event])

    def test_round_trip_through_new_repository(self) -> None:
        """A fresh repository on the same file reads equal records."""
        self.repo.add(self._draft(location="North", damages="Fallen pole", causes=["Strong Wind"]))
        event = self.repo.add(self._draft(location="South"))
        self.repo.update(dataclasses.replace(event, resolved=True, actual_duration=1.25))

        reopened = EventRepository(KeyValueStore(self.db_path), key=KEY)

        self.assertEqual(reopened.get_all(), self.repo.get_all())

    def test_corrupt_blob_reads_as_empty(self) -> None:
        """Unreadable data degrades to an empty list for readers."""
        self.store.set_item(KEY, "{not json")

        self.assertEqual(self.repo.get_all(), [])
        self.assertIsNone(self.repo.get("anything"))
        with self.assertRaises(PersistenceError):
            self.repo.load_all()

    def test_non_list_blob_reads_as_empty(self) -> None:
        self.store.set_item(KEY, '{"id": "x"}')
        self.assertEqual(self.repo.get_all(), [])

    def test_mutation_refuses_to_overwrite_corrupt_blob(self) -> None:
        """add fails rather than replacing unreadable data."""
        self.store.set_item(KEY, "[{\"broken\": true}]")

        with self.assertRaises(PersistenceError):
            self.repo.add(self._draft())

        self.assertEqual(self.store.get_item(KEY), "[{\"broken\": true}]")

    def test_unparseable_date_marks_collection_corrupt(self) -> None:
        """A record with a bad date is rejected at load, for readers and writers alike."""
        good = self.repo.add(self._draft(location="Good"))
        for bad in ("garbage", None, 12345):
            with self.subTest(date=bad):
                entries = [good.to_dict(), dict(good.to_dict(), id="bad", date=bad)]
                blob = json.dumps(entries)
                self.store.set_item(KEY, blob)

                with self.assertRaises(PersistenceError):
                    self.repo.load_all()
                self.assertEqual(self.repo.get_all(), [])
                self.assertEqual(StatsService(self.repo).recent_events(), [])
                self.assertEqual(SummaryService(self.repo).get_summary(), EventSummary())

                with self.assertRaises(PersistenceError):
                    self.repo.add(self._draft())
                self.assertEqual(self.store.get_item(KEY), blob)

    def test_write_failure_raises_and_commits_nothing(self) -> None:
        existing = self.repo.add(self._draft(location="Existing"))

        with patch.object(self.store, "set_item", side_effect=sqlite3.OperationalError("disk I/O error")):
            with self.assertRaises(PersistenceError) as ctx:
                self.repo.add(self._draft(location="Lost"))

        self.assertEqual(str(ctx.exception), "Failed to save event data")
        self.assertEqual(self.repo.get_all(), [existing])

    def test_update_and_remove_failures_raise(self) -> None:
        event = self.repo.add(self._draft())

        with patch.object(self.store, "set_item", side_effect=sqlite3.OperationalError("locked")):
            with self.assertRaises(PersistenceError):
                self.repo.update(dataclasses.replace(event, resolved=True, actual_duration=1.0))
            with self.assertRaises(PersistenceError):
                self.repo.remove(event.id)

        self.assertEqual(self.repo.get_all(), [event])

    def test_read_failure_degrades_to_empty(self) -> None:
        self.repo.add(self._draft())
        with patch.object(self.store, "get_item", side_effect=sqlite3.OperationalError("unreadable")):
            self.assertEqual(self.repo.get_all(), [])

    def test_concurrent_adds_are_all_kept(self) -> None:
        """Adds from many threads and repository instances never clobber each other."""
        errors: list[Exception] = []

        def worker(n: int) -> None:
            repo = EventRepository(KeyValueStore(self.db_path), key=KEY)
            try:
                for i in range(5):
                    repo.add(self._draft(location=f"T{n}-{i}"))
            except Exception as e:  # surfaced via the assertion below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        events = self.repo.get_all()
        self.assertEqual(len(events), 40)
        self.assertEqual(len({e.id for e in events}), 40)

    def test_keys_are_independent(self) -> None:
        other = EventRepository(self.store, key="@Other:events")
        self.repo.add(self._draft())
        self.assertEqual(other.get_all(), [])


if __name__ == "__main__":
    unittest.main()
