"""
Infrastructure event handlers.
Handles domain events and stores the resulting notifications.
"""

from .notification_handlers import EventLoggingHandler, NotificationEventHandler
from .event_setup import build_event_dispatcher

__all__ = [
    "EventLoggingHandler",
    "NotificationEventHandler",
    "build_event_dispatcher",
]
