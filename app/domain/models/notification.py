"""
In-app notification entity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from .base import BaseEntity, ValidationError


class NotificationType(str, Enum):
    MATCH_CREATED = "match_created"
    PROPOSAL_RECEIVED = "proposal_received"
    PROPOSAL_ACCEPTED = "proposal_accepted"
    CONTRACT_CREATED = "contract_created"
    CONTRACT_COMPLETED = "contract_completed"
    PAYMENT_RECEIVED = "payment_received"
    PAYMENT_REFUNDED = "payment_refunded"


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass(kw_only=True, eq=False)
class Notification(BaseEntity):
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    read: bool = False
    priority: NotificationPriority = NotificationPriority.NORMAL

    def __post_init__(self):
        super().__post_init__()
        self.type = NotificationType(self.type)
        self.priority = NotificationPriority(self.priority)
        if not self.user_id:
            raise ValidationError("Recipient is required", "user_id")
        if not self.title or not self.message:
            raise ValidationError("Title and message are required")

    def mark_read(self) -> None:
        if not self.read:
            self.read = True
            self.mark_as_updated()
