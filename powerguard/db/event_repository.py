"""Repository for outage event data access."""
import datetime
import json
import os
import sqlite3
import threading
import uuid
from typing import Dict, List, Optional, Tuple
from .. import config
from ..debug import debug_log
from ..exceptions import PersistenceError
from ..models import EventDraft, EventRecord
from .kv_store import KeyValueStore


def utc_now_iso() -> str:
    """Current time as ISO-8601 UTC with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class EventRepository:
    """
    Event store: the whole collection lives as one JSON array under one key.

    Nothing is cached between calls. Mutations do a full read -> modify ->
    write and are serialized by a lock shared by every repository bound to
    the same database file and key, so concurrent callers never clobber
    each other's changes.

    Reads degrade to empty results on storage faults; mutations raise
    PersistenceError and leave the stored collection untouched.
    """

    _locks: Dict[Tuple[str, str], threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, store: Optional[KeyValueStore] = None, key: Optional[str] = None) -> None:
        self.store = store or KeyValueStore()
        self.key = key or config.EVENTS_KEY
        self._mutation_lock = self._lock_for(os.path.abspath(self.store.db_path), self.key)

    @classmethod
    def _lock_for(cls, db_path: str, key: str) -> threading.Lock:
        with cls._locks_guard:
            return cls._locks.setdefault((db_path, key), threading.Lock())

    # --- Raw collection I/O ---

    def load_all(self) -> List[EventRecord]:
        """
        Read the full collection, raising PersistenceError if it is unreadable.

        A key that was never written reads as an empty collection. Any
        malformed entry, including an unparseable date, makes the whole
        collection unreadable.
        """
        try:
            raw = self.store.get_item(self.key)
            if raw is None:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [EventRecord.from_dict(item) for item in data]
        except (sqlite3.Error, OSError, ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Failed to read event data: {e}") from e

    def _save_all(self, events: List[EventRecord]) -> None:
        try:
            payload = json.dumps([e.to_dict() for e in events])
            self.store.set_item(self.key, payload)
        except (sqlite3.Error, OSError, ValueError, TypeError) as e:
            raise PersistenceError(f"Failed to write event data: {e}") from e
        debug_log(f"saved {len(events)} events under {self.key}")

    # --- Queries ---

    def get_all(self) -> List[EventRecord]:
        """All events in stored (insertion) order; empty on any read fault."""
        try:
            return self.load_all()
        except PersistenceError as e:
            print(f"Error retrieving events: {e}")
            debug_log(f"get_all degraded to empty result: {e}")
            return []

    def get(self, event_id: str) -> Optional[EventRecord]:
        """Find an event by id, or None."""
        for event in self.get_all():
            if event.id == event_id:
                return event
        return None

    # --- Mutations ---

    def add(self, draft: EventDraft) -> EventRecord:
        """Assign id and date to the draft, append it and persist."""
        with self._mutation_lock:
            try:
                events = self.load_all()
                taken = {e.id for e in events}
                event_id = str(uuid.uuid4())
                while event_id in taken:
                    event_id = str(uuid.uuid4())

                record = EventRecord.from_draft(draft, id=event_id, date=utc_now_iso())
                self._save_all(events + [record])
            except PersistenceError as e:
                print(f"Error adding event: {e}")
                raise PersistenceError("Failed to save event data") from e

        debug_log(f"added event {record.id} at {record.location!r}")
        return record

    def update(self, record: EventRecord) -> bool:
        """
        Replace the stored event with the same id, keeping its position.

        Returns False without writing anything when no event has that id;
        update never inserts.
        """
        with self._mutation_lock:
            try:
                events = self.load_all()
                for index, existing in enumerate(events):
                    if existing.id == record.id:
                        events[index] = record
                        break
                else:
                    debug_log(f"update ignored, unknown event id {record.id}")
                    return False
                self._save_all(events)
            except PersistenceError as e:
                print(f"Error updating event: {e}")
                raise PersistenceError("Failed to update event data") from e

        debug_log(f"updated event {record.id}")
        return True

    def remove(self, event_id: str) -> bool:
        """Delete the event with this id. Returns False if there was none."""
        with self._mutation_lock:
            try:
                events = self.load_all()
                remaining = [e for e in events if e.id != event_id]
                if len(remaining) == len(events):
                    return False
                self._save_all(remaining)
            except PersistenceError as e:
                print(f"Error removing event: {e}")
                raise PersistenceError("Failed to remove event") from e

        debug_log(f"removed event {event_id}")
        return True
