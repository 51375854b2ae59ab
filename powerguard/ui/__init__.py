"""UI components."""
from .main_window import MainWindow
from .event_dialog import AddEventDialog
from .event_detail import EventDetailDialog
from .tips import TipsTab

__all__ = ['MainWindow', 'AddEventDialog', 'EventDetailDialog', 'TipsTab']
