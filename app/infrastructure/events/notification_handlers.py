"""
Event handlers for in-app notifications.
Converts domain events into notification rows for the affected users.
"""

import logging
from typing import List

from app.domain.events.base import EventHandler, DomainEvent
from app.domain.events.marketplace_events import (
    MatchCreated,
    ProposalSubmitted,
    ProposalAccepted,
    ContractCreated,
    ContractCompleted,
    PaymentSucceeded,
    PaymentRefunded,
)
from app.domain.models.notification import Notification, NotificationType, NotificationPriority
from app.domain.repositories.notification_repository import NotificationRepository


logger = logging.getLogger(__name__)

HANDLED_EVENTS = (
    MatchCreated,
    ProposalSubmitted,
    ProposalAccepted,
    ContractCreated,
    ContractCompleted,
    PaymentSucceeded,
    PaymentRefunded,
)


def _format_cents(amount: int, currency: str = "usd") -> str:
    return f"{amount / 100:.2f} {currency.upper()}"


class EventLoggingHandler(EventHandler):
    """Global handler that records every event in the log."""

    def can_handle(self, event: DomainEvent) -> bool:
        return True

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Domain event {event.event_type} (ID: {event.event_id}): {event.to_dict()['data']}")


class NotificationEventHandler(EventHandler):
    """Handler that stores a notification for every user an event concerns."""

    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, HANDLED_EVENTS)

    async def handle(self, event: DomainEvent) -> None:
        notifications = self.build_notifications(event)
        for notification in notifications:
            self.notification_repository.save(notification)
        logger.debug(f"Stored {len(notifications)} notification(s) for {event.event_type}")

    def build_notifications(self, event: DomainEvent) -> List[Notification]:
        """Notifications an event produces; unknown events produce none."""
        if isinstance(event, MatchCreated):
            data = {"matchId": event.match_id, "jobPostingId": event.job_posting_id}
            message = "You have a new match"
            if event.job_title:
                message = f"You have a new match for \"{event.job_title}\""
            return [
                Notification(
                    user_id=user_id,
                    type=NotificationType.MATCH_CREATED,
                    title="It's a match!",
                    message=message,
                    data=data,
                    priority=NotificationPriority.HIGH,
                )
                for user_id in (event.company_user_id, event.va_user_id)
            ]

        if isinstance(event, ProposalSubmitted):
            return [Notification(
                user_id=event.company_user_id,
                type=NotificationType.PROPOSAL_RECEIVED,
                title="New proposal received",
                message=f"A VA submitted a proposal for \"{event.job_title}\"",
                data={"proposalId": event.proposal_id, "jobPostingId": event.job_posting_id},
            )]

        if isinstance(event, ProposalAccepted):
            return [Notification(
                user_id=event.va_user_id,
                type=NotificationType.PROPOSAL_ACCEPTED,
                title="Proposal accepted",
                message=f"Your proposal for \"{event.job_title}\" was accepted",
                data={"proposalId": event.proposal_id, "contractId": event.contract_id},
                priority=NotificationPriority.HIGH,
            )]

        if isinstance(event, ContractCreated):
            return [Notification(
                user_id=event.va_user_id,
                type=NotificationType.CONTRACT_CREATED,
                title="New contract",
                message=f"{event.company_name or 'A company'} started a contract with you",
                data={"contractId": event.contract_id},
                priority=NotificationPriority.HIGH,
            )]

        if isinstance(event, ContractCompleted):
            return [
                Notification(
                    user_id=user_id,
                    type=NotificationType.CONTRACT_COMPLETED,
                    title="Contract completed",
                    message="A contract you are part of has been completed",
                    data={"contractId": event.contract_id},
                )
                for user_id in (event.company_user_id, event.va_user_id)
            ]

        if isinstance(event, PaymentSucceeded):
            if not event.receiver_id:
                return []
            return [Notification(
                user_id=event.receiver_id,
                type=NotificationType.PAYMENT_RECEIVED,
                title="Payment received",
                message=f"You received a payment of {_format_cents(event.amount, event.currency)}",
                data={"paymentId": event.payment_id, "contractId": event.contract_id},
                priority=NotificationPriority.HIGH,
            )]

        if isinstance(event, PaymentRefunded):
            if not event.receiver_id:
                return []
            return [Notification(
                user_id=event.receiver_id,
                type=NotificationType.PAYMENT_REFUNDED,
                title="Payment refunded",
                message=f"A payment was refunded ({_format_cents(event.refund_amount)})",
                data={"paymentId": event.payment_id, "reason": event.reason},
            )]

        return []
