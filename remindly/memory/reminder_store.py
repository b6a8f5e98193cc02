"""
Remindly Reminder Store - In-Memory Ordered Collection

Holds the reminders owned by the main window for the lifetime of the process.

Design:
- Plain ordered list, insertion order by default
- Reorder by drag, re-sorted by due date after every add
- No persistence, no locking (mutated from the UI thread only)
- No validation
"""

import logging
from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .reminder_models import Reminder, naive_local

logger = logging.getLogger(__name__)


def visible_entries(reminders: Iterable[Reminder], now: datetime) -> List[Tuple[int, Reminder]]:
    """
    Project the reminders the list shows.

    Past-due reminders stay in the store; they are only left out here.

    Args:
        reminders: Reminders in store order
        now: Current datetime

    Returns:
        (store index, reminder) pairs for reminders due after `now`
    """
    return [(i, r) for i, r in enumerate(reminders) if r.is_visible(now)]


def stale_reminder_ids(reminders: Iterable[Reminder], pending_ids: Iterable[str]) -> Set[str]:
    """
    Ids of reminders with no pending notification.

    Such reminders have already fired or were cancelled outside the app.
    """
    pending = set(pending_ids)
    return {r.id for r in reminders if r.id not in pending}


class ReminderStore:
    """
    Ordered in-memory reminder list.

    Philosophy:
    - Authoritative over every reminder, visible or not
    - Callers decide when to sort
    - Index-based operations mirror the list the user sees
    """

    def __init__(self, reminders: Optional[Iterable[Reminder]] = None):
        self._reminders: List[Reminder] = list(reminders or [])
        logger.info(f"ReminderStore initialized ({len(self._reminders)} reminders)")

    def __len__(self) -> int:
        return len(self._reminders)

    def __iter__(self) -> Iterator[Reminder]:
        return iter(list(self._reminders))

    def append(self, reminder: Reminder):
        """Add a reminder at the end"""
        self._reminders.append(reminder)
        logger.info(f"Added reminder: {reminder.id} - {reminder.title}")

    def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        """
        Get a specific reminder by ID.

        Returns:
            Reminder if found, None otherwise
        """
        for reminder in self._reminders:
            if reminder.id == reminder_id:
                return reminder
        return None

    def index_of(self, reminder_id: str) -> Optional[int]:
        for i, reminder in enumerate(self._reminders):
            if reminder.id == reminder_id:
                return i
        return None

    def remove_at_offsets(self, offsets: Iterable[int]) -> List[Reminder]:
        """
        Remove reminders at the given indices.

        Args:
            offsets: Store indices; out-of-range indices are ignored

        Returns:
            Removed reminders in store order
        """
        doomed = {i for i in offsets if 0 <= i < len(self._reminders)}
        removed = [r for i, r in enumerate(self._reminders) if i in doomed]
        self._reminders = [r for i, r in enumerate(self._reminders) if i not in doomed]

        for reminder in removed:
            logger.info(f"Removed reminder: {reminder.id}")
        return removed

    def remove_by_id(self, reminder_id: str) -> bool:
        """
        Delete a reminder by id.

        Returns:
            True if deleted, False if not found
        """
        index = self.index_of(reminder_id)
        if index is None:
            logger.warning(f"Reminder {reminder_id} not found for deletion")
            return False

        del self._reminders[index]
        logger.info(f"Deleted reminder: {reminder_id}")
        return True

    def move(self, from_offsets: Iterable[int], to_offset: int):
        """
        Move a block of reminders.

        The moved reminders keep their relative order and land before the
        reminder originally at `to_offset` (`len(store)` appends).

        Args:
            from_offsets: Store indices to move
            to_offset: Destination index in the original ordering
        """
        source = sorted(i for i in set(from_offsets) if 0 <= i < len(self._reminders))
        if not source:
            return

        to_offset = max(0, min(to_offset, len(self._reminders)))
        moving = [self._reminders[i] for i in source]
        rest = [r for i, r in enumerate(self._reminders) if i not in source]
        insert_at = to_offset - sum(1 for i in source if i < to_offset)

        rest[insert_at:insert_at] = moving
        self._reminders = rest
        logger.debug(f"Moved {len(moving)} reminder(s) to offset {to_offset}")

    def sort_by_due_date(self):
        """Stable ascending sort on due date"""
        self._reminders.sort(key=lambda r: naive_local(r.due_date))

    def reconcile(self, pending_ids: Iterable[str]) -> Set[str]:
        """
        Drop reminders whose notification is no longer pending.

        Args:
            pending_ids: Identifiers the notification service still holds

        Returns:
            Ids that were removed
        """
        stale = stale_reminder_ids(self._reminders, pending_ids)
        if stale:
            self._reminders = [r for r in self._reminders if r.id not in stale]
            logger.info(f"Reconciled store: dropped {len(stale)} stale reminder(s)")
        return stale
