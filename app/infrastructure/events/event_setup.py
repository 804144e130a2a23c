"""
Event system setup and configuration.
Builds a dispatcher with all event handlers registered.
"""

import logging

from sqlalchemy.orm import Session

from app.domain.events.base import EventDispatcher
from app.infrastructure.repositories.notification_repository import SQLAlchemyNotificationRepository
from .notification_handlers import EventLoggingHandler, NotificationEventHandler, HANDLED_EVENTS

logger = logging.getLogger(__name__)


def build_event_dispatcher(session: Session) -> EventDispatcher:
    """
    Create a dispatcher bound to one request's session, so notifications
    are written in the same transaction as the change that raised them.
    """
    dispatcher = EventDispatcher()

    dispatcher.register_global_handler(EventLoggingHandler())

    notification_handler = NotificationEventHandler(SQLAlchemyNotificationRepository(session))
    for event_class in HANDLED_EVENTS:
        dispatcher.register_handler(event_class.__name__, notification_handler)
    logger.debug(f"Notification handler registered for {len(HANDLED_EVENTS)} event types")

    return dispatcher

