"""Main window with the overview and browsing tabs."""
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTabWidget,
    QListWidget, QListWidgetItem, QLineEdit, QButtonGroup
)
from PyQt5.QtGui import QShowEvent
from PyQt5.QtCore import Qt
from typing import Callable, List, Optional
from ..db.event_repository import EventRepository
from ..exceptions import PersistenceError
from ..models import EventRecord
from ..services import OutageService, StatsService, SummaryService
from ..services.stats_service import DURATION_CATEGORIES
from ..config import settings
from .event_detail import EventDetailDialog
from .event_dialog import AddEventDialog
from .formatting import event_line, format_date, format_duration
from .tips import TipsTab


class MainWindow(QWidget):
    """
    PowerGuard main window.

    Every tab reloads from the store when it becomes visible, so the
    window never shows data older than the last tab switch.
    """

    def __init__(self, repo: Optional[EventRepository] = None) -> None:
        super().__init__()
        self.repo = repo or EventRepository()
        self.summary_service = SummaryService(self.repo)
        self.stats_service = StatsService(self.repo)
        self.outage_service = OutageService(self.repo)

        self.setWindowTitle("PowerGuard")
        self.setMinimumSize(520, 600)

        self.main_layout = QVBoxLayout()
        self.main_layout.setContentsMargins(8, 8, 8, 8)
        self.setLayout(self.main_layout)

        self.tab_widget = QTabWidget()
        self.main_layout.addWidget(self.tab_widget)

        self.create_overview_tab()
        self.create_location_tab()
        self.create_duration_tab()
        self.create_damages_tab()
        self.tab_widget.addTab(TipsTab(), "Tips")

        self.refreshers: List[Callable[[], None]] = [
            self.update_overview,
            self.update_locations,
            self.update_durations,
            self.update_damages,
            lambda: None,
        ]
        self.tab_widget.currentChanged.connect(self.refresh_current_tab)

    # --- Tab construction ---

    def _event_list(self) -> QListWidget:
        """List of events that opens the detail dialog on double-click."""
        widget = QListWidget()
        widget.itemDoubleClicked.connect(self.open_event)
        return widget

    def _tab(self, title: str) -> QVBoxLayout:
        tab = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(5, 10, 5, 5)
        tab.setLayout(layout)
        self.tab_widget.addTab(tab, title)
        return layout

    def create_overview_tab(self) -> None:
        layout = self._tab("Overview")

        header = QHBoxLayout()
        header.addWidget(QLabel("<b>Outage Summary</b>"))
        header.addStretch()
        add_button = QPushButton("Add New Outage")
        add_button.clicked.connect(self.add_event)
        header.addWidget(add_button)
        layout.addLayout(header)

        self.total_label = QLabel()
        self.resolved_label = QLabel()
        self.average_label = QLabel()
        self.most_affected_label = QLabel()
        self.latest_label = QLabel()
        for label in (self.total_label, self.resolved_label, self.average_label,
                      self.most_affected_label, self.latest_label):
            layout.addWidget(label)

        layout.addSpacing(10)
        layout.addWidget(QLabel("<b>Recent Outages</b>"))
        self.overview_empty_label = QLabel()
        self.overview_empty_label.setWordWrap(True)
        layout.addWidget(self.overview_empty_label)
        self.overview_list = self._event_list()
        layout.addWidget(self.overview_list)

    def create_location_tab(self) -> None:
        layout = self._tab("Locations")

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Enter neighborhood, city, or ZIP code...")
        self.search_edit.textChanged.connect(lambda _text: self.update_locations())
        layout.addWidget(self.search_edit)

        layout.addWidget(QLabel("<b>Location Statistics</b>"))
        self.location_stats_label = QLabel()
        layout.addWidget(self.location_stats_label)

        self.location_title = QLabel()
        layout.addWidget(self.location_title)
        self.location_list = self._event_list()
        layout.addWidget(self.location_list)

    def create_duration_tab(self) -> None:
        layout = self._tab("Duration")

        layout.addWidget(QLabel("<b>Duration Statistics</b>"))
        self.duration_average_label = QLabel()
        self.longest_label = QLabel()
        self.distribution_label = QLabel()
        layout.addWidget(self.duration_average_label)
        layout.addWidget(self.longest_label)
        layout.addWidget(self.distribution_label)

        self.duration_list = self._event_list()
        layout.addWidget(self.duration_list)

    def create_damages_tab(self) -> None:
        layout = self._tab("Damages")

        filters = QHBoxLayout()
        self.all_button = QPushButton()
        self.damaged_button = QPushButton()
        self.filter_group = QButtonGroup(self)
        self.filter_group.setExclusive(True)
        for button in (self.all_button, self.damaged_button):
            button.setCheckable(True)
            self.filter_group.addButton(button)
            filters.addWidget(button)
        self.all_button.setChecked(True)
        self.filter_group.buttonClicked.connect(lambda _button: self.update_damages())
        layout.addLayout(filters)

        self.damages_list = self._event_list()
        layout.addWidget(self.damages_list)

    # --- Refresh ---

    def showEvent(self, a0: Optional[QShowEvent]) -> None:
        super().showEvent(a0)
        self.refresh_current_tab()

    def refresh_current_tab(self, index: Optional[int] = None) -> None:
        if index is None:
            index = self.tab_widget.currentIndex()
        self.refreshers[index]()

    def _fill(self, widget: QListWidget, events: List[EventRecord], empty_text: str) -> None:
        widget.clear()
        for event in events:
            item = QListWidgetItem(event_line(event))
            item.setData(Qt.UserRole, event.id)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownArgumentType]
            widget.addItem(item)
        if not events:
            placeholder = QListWidgetItem(empty_text)
            placeholder.setFlags(Qt.NoItemFlags)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownArgumentType]
            widget.addItem(placeholder)

    def update_overview(self) -> None:
        summary = self.summary_service.get_summary()
        self.total_label.setText(f"Total Outages: {summary.total_events}")
        self.resolved_label.setText(f"Resolved: {summary.resolved_events}")
        if summary.average_duration > 0:
            self.average_label.setText(f"Average Duration: {format_duration(summary.average_duration)}")
        else:
            self.average_label.setText("Average Duration: N/A")
        self.most_affected_label.setText(f"Most Affected: {summary.most_affected_location or 'N/A'}")
        self.latest_label.setText(f"Latest Outage: {format_date(summary.latest_event_date) or 'N/A'}")

        try:
            self.repo.load_all()
            self.overview_empty_label.setText("")
        except PersistenceError:
            self.overview_empty_label.setText("Stored outage data could not be read.")

        self._fill(self.overview_list, self.stats_service.recent_events(),
                   "No power outages recorded. Add your first outage to start tracking.")

    def update_locations(self) -> None:
        counts = self.stats_service.location_counts()
        lines = [f"{loc}: {n} {'event' if n == 1 else 'events'}" for loc, n in counts]
        self.location_stats_label.setText("\n".join(lines) or "No locations recorded")

        query = self.search_edit.text()
        events = self.stats_service.search_by_location(query)
        title = f"{len(events)} Power Outage {'Event' if len(events) == 1 else 'Events'}"
        if query.strip():
            title += f' for "{query}"'
        self.location_title.setText(f"<b>{title}</b>")
        self._fill(self.location_list, events, "No events found for this location.")

    def update_durations(self) -> None:
        average = self.stats_service.average_duration()
        longest = self.stats_service.longest_outage()
        self.duration_average_label.setText(
            f"Average Duration: {format_duration(average) if average > 0 else 'N/A'}")
        self.longest_label.setText(
            f"Longest Outage: {format_duration(longest.actual_duration) if longest and longest.actual_duration else 'N/A'}")

        groups = self.stats_service.group_by_duration()
        short, long_ = settings.short_outage_hours, settings.long_outage_hours
        ranges = {
            "Short": f"0-{short:g}h",
            "Medium": f"{short:g}-{long_:g}h",
            "Long": f"{long_:g}h+",
        }
        self.distribution_label.setText("  ".join(
            f"{c} ({ranges[c]}): {len(groups[c])}" for c in DURATION_CATEGORIES))

        self.duration_list.clear()
        for category in DURATION_CATEGORIES:
            if not groups[category]:
                continue
            header = QListWidgetItem(f"{category} Outages ({ranges[category]})")
            header.setFlags(Qt.NoItemFlags)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownArgumentType]
            self.duration_list.addItem(header)
            for event in groups[category]:
                item = QListWidgetItem(event_line(event))
                item.setData(Qt.UserRole, event.id)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownArgumentType]
                self.duration_list.addItem(item)
        if self.duration_list.count() == 0:
            self._fill(self.duration_list, [], "No duration data available.")

    def update_damages(self) -> None:
        events = self.repo.get_all()
        damaged = self.stats_service.events_with_damages()
        self.all_button.setText(f"All Events ({len(events)})")
        self.damaged_button.setText(f"With Damages ({len(damaged)})")

        if self.damaged_button.isChecked():
            self._fill(self.damages_list, damaged, "There are no events with reported damages yet.")
        else:
            self._fill(self.damages_list, events, "No damage reports found.")

    # --- Actions ---

    def add_event(self) -> None:
        dialog = AddEventDialog(self.outage_service, self)
        if dialog.exec_():
            self.refresh_current_tab()

    def open_event(self, item: QListWidgetItem) -> None:
        event_id = item.data(Qt.UserRole)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownArgumentType]
        if not event_id:
            return
        event = self.repo.get(event_id)
        if event is None:
            self.refresh_current_tab()
            return
        dialog = EventDetailDialog(event, self.outage_service, self)
        dialog.exec_()
        if dialog.changed:
            self.refresh_current_tab()
