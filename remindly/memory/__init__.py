"""
Remindly Memory - In-Memory Reminder List

Lives for the lifetime of the process only.
"""

from .reminder_models import (
    ICONS,
    DEFAULT_ICON,
    Reminder,
    ReminderForm,
    create_reminder,
    format_due_date,
    naive_local,
)
from .reminder_store import ReminderStore, stale_reminder_ids, visible_entries

__all__ = [
    'ICONS',
    'DEFAULT_ICON',
    'Reminder',
    'ReminderForm',
    'create_reminder',
    'format_due_date',
    'naive_local',
    'ReminderStore',
    'stale_reminder_ids',
    'visible_entries',
]
