"""PowerGuard: local power-outage event log with summary statistics."""

__version__ = "0.1.0"
