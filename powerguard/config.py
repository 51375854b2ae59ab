import os
import json
from typing import Any, Dict

DB_PATH: str = os.path.expanduser(os.environ.get("POWERGUARD_DB", "~/.local/share/powerguard.db"))
STORAGE_NAMESPACE: str = os.environ.get("POWERGUARD_NAMESPACE", "@PowerGuard")
EVENTS_KEY: str = f"{STORAGE_NAMESPACE}:events"

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser("~/.config/powerguard/settings.json")

# Debug mode - logs store reads/writes and swallowed read faults
DEBUG_MODE: bool = os.environ.get("POWERGUARD_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.expanduser("~/.local/share/powerguard_debug.log")


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages user settings loaded from the JSON settings file.

    Values can be reloaded at runtime; anything missing or unreadable
    falls back to the class defaults.
    """
    DEFAULT_SHORT_OUTAGE_HOURS: float = 2.0
    DEFAULT_LONG_OUTAGE_HOURS: float = 8.0
    DEFAULT_LOCATION_STATS_LIMIT: int = 6

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.short_outage_hours: float = self.DEFAULT_SHORT_OUTAGE_HOURS
        self.long_outage_hours: float = self.DEFAULT_LONG_OUTAGE_HOURS
        self.location_stats_limit: int = self.DEFAULT_LOCATION_STATS_LIMIT

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                print(f"Ignoring unreadable settings file {self.config_path}: {e}")
                return {}
            if isinstance(data, dict):
                return data
        return {}

    def reload(self) -> None:
        """Reload configuration from disk, updating this object's attributes."""
        self._user_config = self._load_user_config()

        self.short_outage_hours = float(self._user_config.get(
            'short_outage_hours', self.DEFAULT_SHORT_OUTAGE_HOURS
        ))
        self.long_outage_hours = float(self._user_config.get(
            'long_outage_hours', self.DEFAULT_LONG_OUTAGE_HOURS
        ))
        self.location_stats_limit = int(self._user_config.get(
            'location_stats_limit', self.DEFAULT_LOCATION_STATS_LIMIT
        ))

        # Buckets must stay ordered
        if self.long_outage_hours < self.short_outage_hours:
            self.long_outage_hours = self.short_outage_hours


# Shared instance imported by services and UI
settings = Config()
