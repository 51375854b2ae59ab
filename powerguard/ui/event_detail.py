"""Dialog showing one outage, with the resolve form while it is active."""
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QPushButton, QLabel,
    QWidget, QMessageBox
)
from PyQt5.QtCore import Qt
from typing import Optional
from ..exceptions import PersistenceError, ValidationError
from ..models import EventRecord
from ..services.outage_service import OutageService
from .formatting import format_date, format_duration


class EventDetailDialog(QDialog):
    """Event details; `changed` is True once the event was resolved here."""

    def __init__(self, event: EventRecord, outage_service: OutageService,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Event Details")
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue, reportUnknownArgumentType]
        self.setMinimumWidth(380)

        self.event = event
        self.outage_service = outage_service
        self.changed = False

        self.main_layout = QVBoxLayout()
        self.setLayout(self.main_layout)

        form = QFormLayout()
        self.status_label = QLabel()
        form.addRow("Status:", self.status_label)
        form.addRow("Location:", QLabel(event.location))
        form.addRow("Reported:", QLabel(format_date(event.date, with_time=True)))
        form.addRow("Estimated Duration:", QLabel(format_duration(event.estimated_duration)))
        self.actual_label = QLabel()
        form.addRow("Actual Duration:", self.actual_label)
        form.addRow("Causes:", QLabel(", ".join(event.causes) or "None specified"))
        damages = QLabel(event.damages.strip() or "No damages reported")
        damages.setWordWrap(True)
        form.addRow("Damages:", damages)
        self.main_layout.addLayout(form)

        # Resolve form
        self.resolve_widget = QWidget()
        resolve_layout = QVBoxLayout()
        resolve_layout.setContentsMargins(0, 10, 0, 0)
        self.resolve_widget.setLayout(resolve_layout)
        resolve_layout.addWidget(QLabel("<b>Mark as Resolved</b>"))
        self.actual_edit = QLineEdit()
        self.actual_edit.setPlaceholderText("Actual duration in hours, e.g., 3.5")
        resolve_layout.addWidget(self.actual_edit)
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #DC2626; font-size: 10px;")
        resolve_layout.addWidget(self.error_label)
        self.resolve_button = QPushButton("Resolve Outage")
        self.resolve_button.clicked.connect(self.resolve)
        resolve_layout.addWidget(self.resolve_button)
        self.main_layout.addWidget(self.resolve_widget)

        close_button = QPushButton("Close")
        close_button.clicked.connect(self.accept)
        self.main_layout.addWidget(close_button)

        self.refresh()

    def refresh(self) -> None:
        self.status_label.setText("Resolved" if self.event.resolved else "Active")
        if self.event.actual_duration:
            self.actual_label.setText(format_duration(self.event.actual_duration))
        else:
            self.actual_label.setText("Not yet resolved")
        self.resolve_widget.setVisible(not self.event.resolved)

    def resolve(self) -> None:
        """Store the actual duration and flip the event to resolved."""
        self.error_label.setText("")
        try:
            self.event = self.outage_service.resolve_outage(self.event.id, self.actual_edit.text())
        except ValidationError as e:
            self.error_label.setText(next(iter(e.errors.values())))
            return
        except PersistenceError:
            QMessageBox.warning(self, "Error", "Failed to update the event. Please try again.")
            return

        self.changed = True
        QMessageBox.information(self, "Success", "Power outage event has been marked as resolved")
        self.refresh()
