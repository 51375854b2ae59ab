"""Application exceptions."""
from typing import Dict, Optional


class PersistenceError(Exception):
    """Durable read or write of the event collection failed."""


class ValidationError(Exception):
    """User input rejected, with one message per offending field."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None) -> None:
        self.errors = errors
        super().__init__(message or "; ".join(errors.values()))
