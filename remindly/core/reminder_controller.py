"""
Remindly Reminder Controller - Reminder Lifecycle Service

Responsibilities:
- Add, edit, delete, cancel, move and sort reminders
- Keep the notification gateway in step with the store
- One-shot reconciliation against the pending set
- NO widgets, NO direct OS calls

Views call this service; it is the only writer of the store.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Set, Tuple

from remindly.memory.reminder_models import Reminder, ReminderForm, create_reminder, naive_local
from remindly.memory.reminder_store import ReminderStore, visible_entries
from remindly.core.notification_gateway import NotificationGateway
from remindly.tools.notification_center import (
    CalendarTrigger,
    NotificationContent,
    TimeIntervalTrigger,
)

logger = logging.getLogger(__name__)


NOTIFICATION_BODY = "Your reminder is due!"
NOTIFICATION_SOUND = "default"


def notification_title(reminder: Reminder) -> str:
    return f"{reminder.icon} {reminder.title} - Reminder due"


def notification_content(reminder: Reminder) -> NotificationContent:
    return NotificationContent(
        title=notification_title(reminder),
        body=NOTIFICATION_BODY,
        sound=NOTIFICATION_SOUND
    )


def _run_now(callback: Callable[[], None]):
    callback()


class ReminderController:
    """
    Lifecycle service over the reminder store.

    Design principles:
    - Store and gateway are injected
    - Gateway completions are marshalled through `dispatch` before they
      touch the store
    - Listeners hear about every store change
    """

    def __init__(
        self,
        store: ReminderStore,
        gateway: NotificationGateway,
        dispatch: Callable[[Callable[[], None]], None] = _run_now,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize reminder controller.

        Args:
            store: Reminder list owned by the main window
            gateway: Notification service
            dispatch: Runs a callable on the UI thread (default: immediately)
            clock: Source of the current time, injected for testability
        """
        self.store = store
        self.gateway = gateway
        self._dispatch = dispatch
        self._clock = clock
        self._listeners: List[Callable[[], None]] = []
        self._started = False
        logger.info("ReminderController initialized")

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[], None]):
        self._listeners.append(listener)

    def _changed(self):
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def start(self):
        """
        Request permission and reconcile once.

        Later calls are ignored; the reconciliation is a snapshot, not a
        subscription.
        """
        if self._started:
            return
        self._started = True
        self.gateway.request_permission()
        self.reconcile()

    def reconcile(self):
        """Drop reminders the notification service no longer holds"""
        def _on_pending(pending_ids: Set[str]):
            self._dispatch(lambda: self._apply_pending(pending_ids))

        self.gateway.list_pending(_on_pending)

    def _apply_pending(self, pending_ids: Set[str]):
        removed = self.store.reconcile(pending_ids)
        if removed:
            self._changed()

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    def add_reminder(self, form: ReminderForm) -> Reminder:
        """
        Create a reminder and schedule its notification.

        The store is not sorted here; the list sorts when the add form
        closes (see `sort_by_due_date`).

        Args:
            form: Submitted form values, accepted as-is

        Returns:
            Created Reminder
        """
        reminder = create_reminder(form)
        self.store.append(reminder)
        self.gateway.schedule(
            reminder.id,
            notification_content(reminder),
            CalendarTrigger.from_date(naive_local(reminder.due_date))
        )

        logger.info(f"Created reminder: {reminder.title} (due: {reminder.due_date})")
        self._changed()
        return reminder

    def sort_by_due_date(self):
        self.store.sort_by_due_date()
        self._changed()

    def update_reminder(self, reminder_id: str, form: ReminderForm) -> bool:
        """
        Replace a reminder's fields and reschedule its notification.

        The old request is cancelled, then a countdown trigger to the new
        due date is scheduled under the same id.

        Args:
            reminder_id: Reminder to edit
            form: New values

        Returns:
            True if the reminder exists
        """
        reminder = self.store.get_reminder(reminder_id)
        if reminder is None:
            logger.warning(f"Reminder {reminder_id} not found for update")
            return False

        reminder.apply(form)
        self.gateway.cancel([reminder.id])
        seconds = (naive_local(reminder.due_date) - naive_local(self._clock())).total_seconds()
        self.gateway.schedule(
            reminder.id,
            notification_content(reminder),
            TimeIntervalTrigger(seconds=seconds)
        )

        logger.info(f"Updated reminder: {reminder.id}")
        self._changed()
        return True

    def delete_at_offsets(self, offsets: Iterable[int]) -> List[Reminder]:
        """
        Remove reminders at store indices and cancel their notifications.

        Returns:
            Removed reminders
        """
        removed = self.store.remove_at_offsets(offsets)
        if removed:
            self.gateway.cancel([r.id for r in removed])
            self._changed()
        return removed

    def cancel_reminder(self, reminder_id: str) -> bool:
        """
        Remove one reminder and cancel its notification.

        Returns:
            True if the reminder was in the store
        """
        if not self.store.remove_by_id(reminder_id):
            return False

        self.gateway.cancel([reminder_id])
        self._changed()
        return True

    def move_reminders(self, from_offsets: Iterable[int], to_offset: int):
        """Reorder only; notifications are untouched"""
        self.store.move(from_offsets, to_offset)
        self._changed()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        return self.store.get_reminder(reminder_id)

    def visible_entries(self, now: Optional[datetime] = None) -> List[Tuple[int, Reminder]]:
        """
        Reminders the list shows, with their store indices.

        Args:
            now: Current datetime (default: controller clock)
        """
        if now is None:
            now = self._clock()
        return visible_entries(self.store, now)
