"""
Remindly - Desktop reminders backed by desktop notifications
"""

__version__ = "0.1.0"
