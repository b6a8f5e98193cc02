"""
Remindly Main Window - Reminder List

Shows only reminders due in the future. Rows map back to store indices so
delete and drag-reorder act on the full store.
"""

import logging
from datetime import datetime
from typing import List, Optional

from PyQt6.QtCore import QModelIndex, Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QToolBar,
)

from remindly.core.reminder_controller import ReminderController
from remindly.memory.reminder_models import format_due_date
from remindly.ui.reminder_detail import ReminderDetailDialog
from remindly.ui.reminder_form import ReminderFormDialog

logger = logging.getLogger(__name__)


class ReminderListWindow(QMainWindow):
    """
    Single window of the app.

    Toolbar: "+" opens the add form, "Edit" toggles drag reorder.
    Delete key or context menu removes a row.
    """

    def __init__(self, controller: ReminderController, refresh_seconds: int = 30):
        super().__init__()
        self.controller = controller
        self._store_indices: List[int] = []
        self._started = False

        self.setWindowTitle("Reminders")
        self.resize(420, 520)

        self.list_widget = QListWidget()
        self.list_widget.setAlternatingRowColors(True)
        self.list_widget.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.list_widget.customContextMenuRequested.connect(self._show_context_menu)
        self.list_widget.itemActivated.connect(self._open_detail)
        self.list_widget.model().rowsMoved.connect(self._on_rows_moved)
        self.setCentralWidget(self.list_widget)

        delete_shortcut = QShortcut(QKeySequence(QKeySequence.StandardKey.Delete), self.list_widget)
        delete_shortcut.activated.connect(self._delete_selected)

        self._build_actions()
        self._set_edit_mode(False)

        self.controller.subscribe(self.refresh)

        self._refresh_timer = QTimer(self)
        self._refresh_timer.timeout.connect(self.refresh)
        if refresh_seconds > 0:
            self._refresh_timer.start(refresh_seconds * 1000)

        self.refresh()

    def _build_actions(self):
        self.new_action = QAction("New Reminder", self)
        self.new_action.setShortcut(QKeySequence("Ctrl+N"))
        self.new_action.triggered.connect(self.open_add_form)

        self.add_action = QAction("+", self)
        self.add_action.setToolTip("Add reminder")
        self.add_action.triggered.connect(self.open_add_form)

        self.edit_action = QAction("Edit", self)
        self.edit_action.setCheckable(True)
        self.edit_action.toggled.connect(self._set_edit_mode)

        toolbar = QToolBar("Reminders")
        toolbar.setMovable(False)
        toolbar.addAction(self.add_action)
        toolbar.addAction(self.edit_action)
        self.addToolBar(toolbar)

        actions_menu = self.menuBar().addMenu("Actions")
        actions_menu.addAction(self.new_action)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def showEvent(self, event):
        super().showEvent(event)
        if not self._started:
            self._started = True
            self.controller.start()

    def refresh(self):
        """Rebuild rows from the store, hiding past-due reminders"""
        entries = self.controller.visible_entries(datetime.now())
        selected = self._selected_store_index()

        self.list_widget.clear()
        self._store_indices = []
        for index, reminder in entries:
            item = QListWidgetItem(
                f"{reminder.display_title}\nDue: {format_due_date(reminder.due_date)}"
            )
            item.setData(Qt.ItemDataRole.UserRole, reminder.id)
            self.list_widget.addItem(item)
            self._store_indices.append(index)

        if selected is not None and selected in self._store_indices:
            self.list_widget.setCurrentRow(self._store_indices.index(selected))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def open_add_form(self):
        dialog = ReminderFormDialog(self.controller, parent=self)
        dialog.exec()
        # Sorting happens whenever the form closes, submitted or not
        self.controller.sort_by_due_date()

    def _set_edit_mode(self, enabled: bool):
        mode = (
            QAbstractItemView.DragDropMode.InternalMove
            if enabled else QAbstractItemView.DragDropMode.NoDragDrop
        )
        self.list_widget.setDragDropMode(mode)
        self.list_widget.setDefaultDropAction(Qt.DropAction.MoveAction)
        self.edit_action.setText("Done" if enabled else "Edit")

    def _selected_store_index(self) -> Optional[int]:
        row = self.list_widget.currentRow()
        if 0 <= row < len(self._store_indices):
            return self._store_indices[row]
        return None

    def _delete_selected(self):
        index = self._selected_store_index()
        if index is not None:
            self.controller.delete_at_offsets({index})

    def _show_context_menu(self, position):
        item = self.list_widget.itemAt(position)
        if item is None:
            return
        self.list_widget.setCurrentItem(item)
        menu = QMenu(self)
        delete_action = menu.addAction("Delete")
        chosen = menu.exec(self.list_widget.mapToGlobal(position))
        if chosen is delete_action:
            self._delete_selected()

    def _open_detail(self, item: QListWidgetItem):
        reminder_id = item.data(Qt.ItemDataRole.UserRole)
        ReminderDetailDialog(self.controller, reminder_id, parent=self).exec()

    def _on_rows_moved(self, parent: QModelIndex, start: int, end: int, destination: QModelIndex, row: int):
        """Translate a visible-row move into a store move"""
        if not self._store_indices:
            return
        source = {self._store_indices[r] for r in range(start, end + 1) if r < len(self._store_indices)}
        if row < len(self._store_indices):
            to_offset = self._store_indices[row]
        else:
            to_offset = len(self.controller.store)
        # Defer so Qt finishes its own move before the rows are rebuilt
        QTimer.singleShot(0, lambda: self.controller.move_reminders(source, to_offset))
