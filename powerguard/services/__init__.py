"""Business logic services."""
from .summary_service import SummaryService
from .stats_service import StatsService
from .outage_service import OutageService

__all__ = ['SummaryService', 'StatsService', 'OutageService']
