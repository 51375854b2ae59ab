"""Dialog for recording a new power outage."""
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit, QGridLayout,
    QPushButton, QDialogButtonBox, QLabel, QWidget, QMessageBox
)
from PyQt5.QtCore import Qt
from typing import Dict, Optional
from ..exceptions import PersistenceError, ValidationError
from ..models import NATURAL_CAUSES, EventDraft, EventRecord
from ..services.outage_service import OutageService


class AddEventDialog(QDialog):
    """Form with location, estimated duration, damages and cause toggles."""

    def __init__(self, outage_service: OutageService, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Record Power Outage")
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue, reportUnknownArgumentType]
        self.setMinimumWidth(420)

        self.outage_service = outage_service
        self.created: Optional[EventRecord] = None
        # Tracks cause toggles; the draft keeps them unique and ordered
        self.draft = EventDraft(location="", estimated_duration=0.0)

        layout = QVBoxLayout()
        self.setLayout(layout)

        layout.addWidget(QLabel("<b>Event Details</b>"))
        form = QFormLayout()

        self.location_edit = QLineEdit()
        self.location_edit.setPlaceholderText("Neighborhood, City, or ZIP Code")
        form.addRow("Affected Location *", self.location_edit)
        self.location_error = self._error_label()
        form.addRow("", self.location_error)

        self.duration_edit = QLineEdit()
        self.duration_edit.setPlaceholderText("e.g., 2.5")
        form.addRow("Estimated Duration (hours) *", self.duration_edit)
        self.duration_error = self._error_label()
        form.addRow("", self.duration_error)

        self.damages_edit = QTextEdit()
        self.damages_edit.setPlaceholderText("Describe any damages or affected infrastructure...")
        self.damages_edit.setFixedHeight(80)
        form.addRow("Caused Damages", self.damages_edit)
        layout.addLayout(form)

        layout.addSpacing(10)
        layout.addWidget(QLabel("<b>Probable Causes</b>"))
        layout.addWidget(QLabel("Select all natural events that contributed to the outage:"))

        grid = QGridLayout()
        self.cause_buttons: Dict[str, QPushButton] = {}
        for i, cause in enumerate(NATURAL_CAUSES):
            button = QPushButton(cause)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked, c=cause: self.toggle_cause(c))
            grid.addWidget(button, i // 2, i % 2)
            self.cause_buttons[cause] = button
        layout.addLayout(grid)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel  # pyright: ignore[reportArgumentType, reportCallIssue]
        )
        buttons.accepted.connect(self.save_and_close)  # pyright: ignore[reportUnknownMemberType]
        buttons.rejected.connect(self.reject)  # pyright: ignore[reportUnknownMemberType]
        layout.addWidget(buttons)

    @staticmethod
    def _error_label() -> QLabel:
        label = QLabel("")
        label.setStyleSheet("color: #DC2626; font-size: 10px;")
        return label

    def toggle_cause(self, cause: str) -> None:
        self.draft.toggle_cause(cause)
        self.cause_buttons[cause].setChecked(cause in self.draft.causes)

    def save_and_close(self) -> None:
        """Validate and store the event, keeping the dialog open on failure."""
        self.location_error.setText("")
        self.duration_error.setText("")

        try:
            self.created = self.outage_service.record_outage(
                location=self.location_edit.text(),
                estimated_duration=self.duration_edit.text(),
                causes=self.draft.causes,
                damages=self.damages_edit.toPlainText(),
            )
        except ValidationError as e:
            self.location_error.setText(e.errors.get("location", ""))
            self.duration_error.setText(e.errors.get("estimated_duration", ""))
            if "causes" in e.errors:
                QMessageBox.warning(self, "Invalid Causes", e.errors["causes"])
            return
        except PersistenceError:
            QMessageBox.warning(self, "Error", "Failed to save the event. Please try again.")
            return

        QMessageBox.information(self, "Success", "Power outage event has been recorded successfully")
        self.accept()
