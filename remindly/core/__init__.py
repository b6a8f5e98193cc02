"""
Remindly Core - Reminder lifecycle and the notification seam
"""

from .notification_gateway import (
    NotificationGateway,
    CenterNotificationGateway,
    InMemoryNotificationGateway,
)
from .reminder_controller import (
    ReminderController,
    NOTIFICATION_BODY,
    notification_content,
    notification_title,
)

__all__ = [
    'NotificationGateway',
    'CenterNotificationGateway',
    'InMemoryNotificationGateway',
    'ReminderController',
    'NOTIFICATION_BODY',
    'notification_content',
    'notification_title',
]
