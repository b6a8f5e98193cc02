"""
Remindly Tools - System Integration Layer

OS glue for desktop notifications.
"""

from . import notification_center

__all__ = [
    'notification_center',
]
