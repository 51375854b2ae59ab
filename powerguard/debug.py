"""Debug log writer, active only when POWERGUARD_DEBUG=1."""
import os
import datetime
from . import config


def debug_log(message: str) -> None:
    """Write debug message to log file if debug mode is enabled."""
    if not config.DEBUG_MODE:
        return
    timestamp = datetime.datetime.now().isoformat(timespec='milliseconds')
    try:
        os.makedirs(os.path.dirname(config.DEBUG_LOG_PATH), exist_ok=True)
        with open(config.DEBUG_LOG_PATH, 'a') as f:
            f.write(f"[{timestamp}] {message}\n")
    except OSError as e:
        print(f"Debug log write failed: {e}")
