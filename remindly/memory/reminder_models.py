"""
Remindly Reminder Models

Data structures for the reminder list.

Philosophy:
- One entity, no behavioral metadata
- No validation beyond types (the form accepts anything)
- Pure data representation
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import uuid


# Fixed glyph set offered by the icon picker
ICONS = ["🔔", "📅", "⏰", "📝", "📌"]
DEFAULT_ICON = ICONS[0]


def naive_local(value: datetime) -> datetime:
    """Aware datetimes become naive system local time; naive ones pass through"""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@dataclass
class ReminderForm:
    """Transient values collected by the add/edit form."""
    title: str
    description: str
    due_date: datetime
    icon: str = DEFAULT_ICON


@dataclass
class Reminder:
    """
    A single user-created reminder.

    `id` doubles as the notification request identifier, so it must never
    change once the reminder exists.
    """
    title: str
    description: str
    due_date: datetime  # Naive datetime in system local time
    icon: str = DEFAULT_ICON
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = str(uuid.uuid4())
        if not isinstance(self.due_date, datetime):
            raise TypeError("due_date must be datetime")

    def is_visible(self, now: datetime) -> bool:
        """
        Check if reminder belongs in the list.

        Logic: due_date > now (strictly in the future)

        Args:
            now: Current datetime to check against
        """
        return naive_local(self.due_date) > naive_local(now)

    def apply(self, form: ReminderForm):
        """Replace every field except the id with the form values"""
        if not isinstance(form.due_date, datetime):
            raise TypeError("due_date must be datetime")
        self.title = form.title
        self.description = form.description
        self.due_date = form.due_date
        self.icon = form.icon

    def to_form(self) -> ReminderForm:
        """Prefill values for the edit form"""
        return ReminderForm(
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            icon=self.icon
        )

    @property
    def display_title(self) -> str:
        return f"{self.icon} {self.title}"


def create_reminder(form: ReminderForm, reminder_id: Optional[str] = None) -> Reminder:
    """
    Factory function to create a new reminder from form values.

    Args:
        form: Submitted form values
        reminder_id: Explicit id (default: fresh UUID4)

    Returns:
        New Reminder
    """
    return Reminder(
        id=reminder_id or str(uuid.uuid4()),
        title=form.title,
        description=form.description,
        due_date=form.due_date,
        icon=form.icon
    )


def format_due_date(due_date: datetime) -> str:
    """Short date and short time, e.g. '10/20/26, 9:00 AM'"""
    hour = due_date.hour % 12 or 12
    suffix = "AM" if due_date.hour < 12 else "PM"
    return (
        f"{due_date.month}/{due_date.day}/{due_date.strftime('%y')}, "
        f"{hour}:{due_date.minute:02d} {suffix}"
    )
