"""
Remindly UI - PyQt6 views over the reminder controller
"""

from .main_window import ReminderListWindow
from .reminder_detail import ReminderDetailDialog
from .reminder_form import ReminderFormDialog

__all__ = [
    'ReminderListWindow',
    'ReminderDetailDialog',
    'ReminderFormDialog',
]
