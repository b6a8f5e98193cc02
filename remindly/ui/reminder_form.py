"""
Remindly Reminder Form - Add and Edit dialogs

Same form shape for both flows; only the title, submit label and what
happens on submit differ.
"""

import logging
from datetime import datetime
from typing import Optional

from PyQt6.QtCore import QDateTime
from PyQt6.QtWidgets import (
    QComboBox,
    QDateTimeEdit,
    QDialog,
    QFormLayout,
    QGroupBox,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from remindly.core.reminder_controller import ReminderController
from remindly.memory.reminder_models import ICONS, DEFAULT_ICON, Reminder, ReminderForm

logger = logging.getLogger(__name__)


class ReminderFormDialog(QDialog):
    """
    Title, description, due date and icon.

    No validation: empty titles and past dates are accepted.
    """

    def __init__(
        self,
        controller: ReminderController,
        reminder: Optional[Reminder] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self.controller = controller
        self.reminder = reminder

        editing = reminder is not None
        self.setWindowTitle("Edit Reminder" if editing else "New Reminder")
        self.setMinimumWidth(380)

        details = QGroupBox("Reminder Details")
        form_layout = QFormLayout(details)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Title")
        self.description_edit = QLineEdit()
        self.description_edit.setPlaceholderText("Description")

        self.due_edit = QDateTimeEdit()
        self.due_edit.setCalendarPopup(True)
        self.due_edit.setDisplayFormat("yyyy-MM-dd HH:mm")

        self.icon_combo = QComboBox()
        self.icon_combo.addItems(ICONS)

        form_layout.addRow("Title", self.title_edit)
        form_layout.addRow("Description", self.description_edit)
        form_layout.addRow("Due Date", self.due_edit)
        form_layout.addRow("Icon", self.icon_combo)

        self.submit_button = QPushButton("Save Changes" if editing else "Add Reminder")
        self.submit_button.setDefault(True)
        self.submit_button.clicked.connect(self._submit)

        layout = QVBoxLayout(self)
        layout.addWidget(details)
        layout.addWidget(self.submit_button)

        if editing:
            self._load(reminder.to_form())
        else:
            self.due_edit.setDateTime(QDateTime.currentDateTime())
            self.icon_combo.setCurrentText(DEFAULT_ICON)

    def _load(self, form: ReminderForm):
        self.title_edit.setText(form.title)
        self.description_edit.setText(form.description)
        self.due_edit.setDateTime(QDateTime(form.due_date))
        self.icon_combo.setCurrentText(form.icon)

    def form_values(self) -> ReminderForm:
        due_date: datetime = self.due_edit.dateTime().toPyDateTime()
        return ReminderForm(
            title=self.title_edit.text(),
            description=self.description_edit.text(),
            due_date=due_date,
            icon=self.icon_combo.currentText()
        )

    def _submit(self):
        form = self.form_values()
        if self.reminder is None:
            self.controller.add_reminder(form)
        else:
            self.controller.update_reminder(self.reminder.id, form)
        self.accept()
