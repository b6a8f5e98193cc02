"""
Remindly Voice - Optional spoken alerts
"""

from .voice_output import AlertAnnouncer, alert_text

__all__ = [
    'AlertAnnouncer',
    'alert_text',
]
