"""
Ports to the third-party services the marketplace depends on.
Infrastructure provides the Firebase, Stripe and R2 implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims taken from a verified identity token."""

    uid: str
    email: Optional[str]
    claims: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    amount: int
    currency: str
    status: str
    client_secret: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StoredObject:
    key: str
    size: int
    etag: Optional[str] = None
    content_type: Optional[str] = None


class IdentityProvider(ABC):
    """
    Identity provider interface.
    Defines token verification and account operations.
    """

    @abstractmethod
    def verify_token(self, token: str) -> VerifiedIdentity:
        """
        Verify an ID token. Raises on an invalid or expired token.
        """
        pass

    @abstractmethod
    def generate_password_reset_link(self, email: str) -> str:
        pass

    @abstractmethod
    def create_custom_token(self, uid: str) -> str:
        pass


class PaymentGateway(ABC):
    """
    Payment processor interface. Amounts are integer cents.
    """

    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str,
                              metadata: Optional[Dict[str, Any]] = None) -> PaymentIntent:
        pass

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        pass

    @abstractmethod
    def refund(self, intent_id: str, amount: Optional[int] = None) -> Dict[str, Any]:
        pass

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """
        Parse a webhook payload, verifying its signature.
        """
        pass


class FileStorage(ABC):
    """
    Object storage interface.
    """

    @abstractmethod
    def generate_upload_url(self, key: str, content_type: str, expires_in: int) -> str:
        pass

    @abstractmethod
    def head_object(self, key: str) -> Optional[StoredObject]:
        """
        Object metadata, or None when the key does not exist.
        """
        pass

    @abstractmethod
    def delete_object(self, key: str) -> None:
        pass

    @abstractmethod
    def public_url(self, key: str) -> str:
        pass
