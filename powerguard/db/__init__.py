"""Database layer."""
from .connection import get_connection, get_cursor, ensure_db_exists
from .kv_store import KeyValueStore
from .event_repository import EventRepository

__all__ = ['get_connection', 'get_cursor', 'ensure_db_exists', 'KeyValueStore', 'EventRepository']
