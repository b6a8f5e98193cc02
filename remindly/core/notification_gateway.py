"""
Remindly Notification Gateway - Narrow Interface to the Notification Service

Responsibilities:
- Request permission, schedule, cancel and list pending notifications
- Log external failures (never raise them to the views)
- NO reminder logic, NO store access

The controller only ever talks to this interface, so tests swap in the
in-memory implementation.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Set

from remindly.tools.notification_center import (
    DesktopNotificationCenter,
    NotificationContent,
    NotificationError,
    NotificationRequest,
    Trigger,
)

logger = logging.getLogger(__name__)


PermissionCompletion = Callable[[bool, Optional[Exception]], None]
PendingIdsCompletion = Callable[[Set[str]], None]


class NotificationGateway(ABC):
    """Operations the reminder controller relies on"""

    @abstractmethod
    def request_permission(self, completion: Optional[PermissionCompletion] = None):
        """Ask for permission to show notifications (fire-and-forget)"""
        pass

    @abstractmethod
    def schedule(self, reminder_id: str, content: NotificationContent, trigger: Trigger):
        """Schedule a one-shot notification; replaces any with the same id"""
        pass

    @abstractmethod
    def cancel(self, reminder_ids: Iterable[str]):
        """Cancel pending notifications; unknown ids are ignored"""
        pass

    @abstractmethod
    def list_pending(self, completion: PendingIdsCompletion):
        """Deliver the ids of pending notifications to `completion`"""
        pass


class CenterNotificationGateway(NotificationGateway):
    """Gateway backed by the desktop notification center"""

    def __init__(self, center: DesktopNotificationCenter):
        self.center = center
        logger.info("CenterNotificationGateway initialized")

    def request_permission(self, completion: Optional[PermissionCompletion] = None):
        def _on_authorization(granted: bool, error: Optional[Exception]):
            if error:
                logger.error(f"Error requesting notification permission: {error}")
            else:
                logger.info(f"Notification permission granted={granted}")
            if completion:
                completion(granted, error)

        self.center.request_authorization(_on_authorization)

    def schedule(self, reminder_id: str, content: NotificationContent, trigger: Trigger):
        def _on_added(error: Optional[Exception]):
            if error:
                logger.error(f"Error scheduling notification: {error}")

        request = NotificationRequest(identifier=reminder_id, content=content, trigger=trigger)
        self.center.add(request, _on_added)

    def cancel(self, reminder_ids: Iterable[str]):
        self.center.remove_pending(list(reminder_ids))

    def list_pending(self, completion: PendingIdsCompletion):
        self.center.pending_requests(
            lambda requests: completion({r.identifier for r in requests})
        )


class InMemoryNotificationGateway(NotificationGateway):
    """
    Gateway that only records requests.

    Completions run synchronously. Fire dates are resolved against the
    injected clock with the same trigger rules as the desktop center.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None, granted: bool = True):
        self._clock = clock or datetime.now
        self.granted = granted
        self.pending: Dict[str, NotificationRequest] = {}
        self.errors = []

    def request_permission(self, completion: Optional[PermissionCompletion] = None):
        if completion:
            completion(self.granted, None)

    def schedule(self, reminder_id: str, content: NotificationContent, trigger: Trigger):
        try:
            fire_at = trigger.next_fire_date(self._clock())
        except NotificationError as e:
            logger.error(f"Error scheduling notification: {e}")
            self.errors.append(e)
            return

        if fire_at is None:
            self.pending.pop(reminder_id, None)
            return
        self.pending[reminder_id] = NotificationRequest(
            identifier=reminder_id,
            content=content,
            trigger=trigger,
            fire_at=fire_at
        )

    def cancel(self, reminder_ids: Iterable[str]):
        for reminder_id in reminder_ids:
            self.pending.pop(reminder_id, None)

    def list_pending(self, completion: PendingIdsCompletion):
        completion(set(self.pending))
