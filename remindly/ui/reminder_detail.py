"""
Remindly Reminder Detail - read-only view with Edit and Cancel
"""

import logging
from typing import Optional

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from remindly.core.reminder_controller import ReminderController
from remindly.memory.reminder_models import format_due_date
from remindly.ui.reminder_form import ReminderFormDialog

logger = logging.getLogger(__name__)


class ReminderDetailDialog(QDialog):

    def __init__(self, controller: ReminderController, reminder_id: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.controller = controller
        self.reminder_id = reminder_id
        self.setWindowTitle("Reminder Details")
        self.setMinimumWidth(360)

        self.title_label = QLabel()
        title_font = QFont()
        title_font.setPointSize(title_font.pointSize() + 10)
        self.title_label.setFont(title_font)
        self.title_label.setWordWrap(True)

        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        self.due_label = QLabel()

        edit_button = QPushButton("Edit")
        edit_button.clicked.connect(self._edit)
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self._cancel_reminder)

        buttons = QHBoxLayout()
        buttons.addWidget(edit_button)
        buttons.addWidget(cancel_button)

        layout = QVBoxLayout(self)
        layout.addWidget(self.title_label)
        layout.addWidget(self.description_label)
        layout.addWidget(self.due_label)
        layout.addStretch(1)
        layout.addLayout(buttons)

        self._refresh()

    def _refresh(self):
        reminder = self.controller.get_reminder(self.reminder_id)
        if reminder is None:
            self.reject()
            return
        self.title_label.setText(reminder.display_title)
        self.description_label.setText(reminder.description)
        self.due_label.setText(f"Due: {format_due_date(reminder.due_date)}")

    def _edit(self):
        reminder = self.controller.get_reminder(self.reminder_id)
        if reminder is None:
            logger.warning(f"Reminder {self.reminder_id} vanished before edit")
            self.reject()
            return
        ReminderFormDialog(self.controller, reminder=reminder, parent=self).exec()
        self._refresh()

    def _cancel_reminder(self):
        self.controller.cancel_reminder(self.reminder_id)
        self.accept()
